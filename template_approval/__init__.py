"""Human-gated approval workflow for CloudFormation templates stored in S3."""

__version__ = "0.1.0"
