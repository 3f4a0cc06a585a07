"""Bot configuration settings."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class BotConfig:
    """Configuration shared by the EPA Bienestar bots."""

    # AWS SES settings
    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""

    # Email addresses
    from_email: str = "alertas@epa-bienestar.com.ar"
    admin_email: str = "admin@epa-bienestar.com.ar"

    # Medplum settings
    medplum_base_url: str = "https://api.medplum.com/"
    medplum_client_id: str | None = None
    medplum_client_secret: str | None = None

    # Rendering
    portal_url: str = "https://cardio.epa-bienestar.com.ar"
    timezone: str = "America/Argentina/Buenos_Aires"

    # "email" (CareTeam lookup + doctor email) or "direct" (practitioner fan-out)
    notification_mode: str = "email"

    @classmethod
    def from_env(cls) -> BotConfig:
        """Load configuration from environment variables."""
        return cls(
            aws_region=os.getenv("AWS_REGION") or "us-east-1",
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", ""),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", ""),
            from_email=os.getenv("FROM_EMAIL") or "alertas@epa-bienestar.com.ar",
            admin_email=os.getenv("ADMIN_EMAIL") or "admin@epa-bienestar.com.ar",
            medplum_base_url=os.getenv("MEDPLUM_BASE_URL", "https://api.medplum.com/"),
            medplum_client_id=os.getenv("MEDPLUM_CLIENT_ID"),
            medplum_client_secret=os.getenv("MEDPLUM_CLIENT_SECRET"),
            portal_url=os.getenv("EPA_PORTAL_URL", "https://cardio.epa-bienestar.com.ar"),
            timezone=os.getenv("EPA_TIMEZONE", "America/Argentina/Buenos_Aires"),
            notification_mode=os.getenv("EPA_NOTIFICATION_MODE", "email").lower(),
        )


# Global config instance
_config: BotConfig | None = None


def get_config() -> BotConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = BotConfig.from_env()
    return _config
