"""Library settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_TTL_DEFAULT = 3600


class JWSSettings(BaseSettings):
    """Token defaults, claim checks, and logging options."""

    model_config = SettingsConfigDict(env_prefix="JWS_")

    token_ttl: int = TOKEN_TTL_DEFAULT
    verify_iat: bool = True
    verify_nbf: bool = True
    verify_exp: bool = True
    log_level: str = "INFO"
    log_json: bool = False
