from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DOTENV_FILE = ".env"


class EnvSettings(BaseSettings):
    api_base: str = "https://api.cdn77.com/v3"

    # CDN resource the job URLs belong to
    resource_id: int | None = None

    # seconds
    timeout: float = 30.0

    # max URLs per job request
    batch_size: int = 2000

    # debug
    verbose: bool = False

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE,
        env_prefix="cdn77_",
        extra="ignore",
    )


def describe_errors(error: ValidationError) -> str:
    """One line per invalid setting, joined."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
