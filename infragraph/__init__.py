"""InfraGraph -- Terraform state to architecture diagram service."""

__version__ = "1.0.0"
