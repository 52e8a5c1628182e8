from dataclasses import dataclass

from kaizen_mcp.core.config import KaizenConfig
from kaizen_mcp.sdk.client import KaizenClient


@dataclass
class ServerContext:
    """Process-wide handles shared by every request."""
    config: KaizenConfig
    client: KaizenClient

    @classmethod
    def from_config(cls, config: KaizenConfig) -> "ServerContext":
        client = KaizenClient(
            base_url=config.api.base_url,
            api_key=config.api.api_key,
            timeout=config.api.timeout,
        )
        return cls(config=config, client=client)

    def close(self) -> None:
        self.client.close()
