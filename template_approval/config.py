"""Configuration settings for template approval."""

import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AWS
    aws_region: str | None = None
    aws_profile: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None
    http_proxy: str | None = None
    https_proxy: str | None = None

    # Reviews always talk to S3 through this region
    review_region: str = "us-east-1"

    # Stack-args file read by `request` when --argsfile is not given
    default_argsfile: str = "stack-args.yaml"

    # Output
    log_level: str = "INFO"
    color: bool = True

    def apply_to_environment(self) -> None:
        """Set environment variables from configuration.

        This allows you to configure AWS credentials and proxies in code
        instead of relying only on .env or system environment variables.

        Example:
            settings = Settings()
            settings.apply_to_environment()
        """
        if self.aws_access_key_id:
            os.environ["AWS_ACCESS_KEY_ID"] = self.aws_access_key_id
        if self.aws_secret_access_key:
            os.environ["AWS_SECRET_ACCESS_KEY"] = self.aws_secret_access_key
        if self.aws_session_token:
            os.environ["AWS_SESSION_TOKEN"] = self.aws_session_token
        if self.http_proxy:
            os.environ["HTTP_PROXY"] = self.http_proxy
        if self.https_proxy:
            os.environ["HTTPS_PROXY"] = self.https_proxy

    class Config:
        """Pydantic config.

        AWS credentials are optional. If not provided via environment variables,
        boto3 will use the default credential chain:
        1. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)
        2. Shared credentials file (~/.aws/credentials), honouring AWS_PROFILE
        3. IAM role (if running on EC2/ECS/Lambda)

        Stack-args files may name a `Profile` and `Region`; those take
        precedence over aws_profile / aws_region for `request`.
        """

        env_file = ".env"
        env_file_encoding = "utf-8"
