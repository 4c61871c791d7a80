"""SMTP configuration model.

Defines the Pydantic model for one sender's SMTP session parameters.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from pydantic import BaseModel, Field, SecretStr, field_validator


class SMTPConfig(BaseModel):
    """SMTP session configuration model.

    Combines the relay settings with the credentials of a single sender.
    Instances live only for one delivery.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port (1-65535).
        username: Sender address used to authenticate.
        password: App-specific password for the sender.
        use_tls: Whether to use STARTTLS.
        timeout: Socket timeout in seconds.
    """

    host: str = Field(..., min_length=1, description="SMTP server hostname")
    port: int = Field(..., ge=1, le=65535, description="SMTP server port")
    username: str = Field(..., min_length=1, description="SMTP authentication username")
    password: SecretStr = Field(..., description="SMTP authentication password")
    use_tls: bool = Field(default=True, description="Use TLS encryption")
    timeout: int = Field(
        default=30, ge=5, le=300, description="Connection timeout (seconds)"
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        """Reject an empty password.

        Whitespace is passed to the relay as-is; only the relay can judge it.

        Raises:
            ValueError: If the password is the empty string.
        """
        if not v.get_secret_value():
            raise ValueError("SMTP password cannot be empty")
        return v
