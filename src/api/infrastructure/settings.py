"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        COLLAB_DB_HOST: Database host (default: localhost)
        COLLAB_DB_PORT: Database port (default: 5432)
        COLLAB_DB_DATABASE: Database name (default: collaborators)
        COLLAB_DB_USERNAME: Database user (default: collaborators)
        COLLAB_DB_PASSWORD: Database password (required in production)
        COLLAB_DB_POOL_MIN_CONNECTIONS: Connections kept open in pool (default: 2)
        COLLAB_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="COLLAB_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="collaborators", description="Database name")
    username: str = Field(default="collaborators", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Connections kept open in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class KeycloakSettings(BaseSettings):
    """Keycloak authorization server settings.

    The service talks to Keycloak as a confidential client: the client
    credentials grant yields the protection API token used for policy
    reads and writes, and the entitlement endpoint decides whether a
    caller may act on a space.

    Environment variables:
        COLLAB_KEYCLOAK_URL: Keycloak base URL (default: http://localhost:8080)
        COLLAB_KEYCLOAK_REALM: Realm name (default: fabric8)
        COLLAB_KEYCLOAK_CLIENT_ID: Confidential client ID (default: fabric8-online-platform)
        COLLAB_KEYCLOAK_CLIENT_SECRET: Client secret (required in production)
        COLLAB_KEYCLOAK_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 10.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="COLLAB_KEYCLOAK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:8080",
        description="Keycloak base URL",
    )
    realm: str = Field(default="fabric8", description="Keycloak realm")
    client_id: str = Field(
        default="fabric8-online-platform",
        description="Confidential client owning the space resources and policies",
    )
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Client secret for the client credentials grant",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for calls to Keycloak",
        gt=0,
    )

    @property
    def realm_url(self) -> str:
        """Public realm URL (token and entitlement endpoints live below it)."""
        return f"{self.url.rstrip('/')}/auth/realms/{self.realm}"

    @property
    def token_endpoint(self) -> str:
        """OpenID Connect token endpoint."""
        return f"{self.realm_url}/protocol/openid-connect/token"

    @property
    def entitlement_endpoint(self) -> str:
        """Entitlement endpoint for the configured client."""
        return f"{self.realm_url}/authz/entitlement/{self.client_id}"

    @property
    def clients_endpoint(self) -> str:
        """Admin endpoint listing the realm's clients."""
        return f"{self.url.rstrip('/')}/auth/admin/realms/{self.realm}/clients"


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="COLLAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Space Collaborators API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def keycloak(self) -> KeycloakSettings:
        """Get Keycloak settings."""
        return get_keycloak_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_keycloak_settings() -> KeycloakSettings:
    """Get cached Keycloak settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return KeycloakSettings()
