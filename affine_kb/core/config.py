"""Application configuration using Pydantic Settings.

Environment variables are loaded with the AFFINE_KB_ prefix, e.g.
AFFINE_KB_API_KEY, AFFINE_KB_TRANSPORT, AFFINE_KB_WORKSPACE_ID.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from affine_kb.core.constants import DEFAULT_TIMEOUT


class TransportKind(str, Enum):
    """Wire protocol used to reach the workspace service.

    - GRAPHQL: typed query language over HTTP ({query, variables} -> {data, errors})
    - JSONRPC: JSON-RPC call answered by a single JSON document
    - JSONRPC_STREAM: JSON-RPC call whose reply may arrive as an SSE stream
    """
    GRAPHQL = "graphql"
    JSONRPC = "jsonrpc"
    JSONRPC_STREAM = "jsonrpc_stream"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service configuration
    service_name: str = "affine-kb"
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Transport selection
    transport: TransportKind = Field(
        default=TransportKind.GRAPHQL,
        description="Which wire protocol the deployment speaks",
    )
    api_url: str = Field(
        default="https://app.affine.pro/graphql",
        description="GraphQL endpoint (graphql transport)",
    )
    mcp_endpoint: str = Field(
        default="http://localhost:3010/mcp",
        description="JSON-RPC endpoint (jsonrpc / jsonrpc_stream transports)",
    )
    jsonrpc_envelope: bool = Field(
        default=True,
        description="Wrap calls in a {jsonrpc, id, method, params} envelope",
    )

    # Credentials and workspace
    api_key: SecretStr = Field(default=SecretStr(""), description="Static bearer credential")
    workspace_id: str = Field(default="", description="Default workspace for page actions")

    # Request timeouts
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Per-call HTTP timeout",
    )

    model_config = SettingsConfigDict(
        env_prefix="AFFINE_KB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def endpoint(self) -> str:
        """URL the configured transport posts to."""
        if self.transport is TransportKind.GRAPHQL:
            return self.api_url
        return self.mcp_endpoint


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton
    """
    return Settings()
