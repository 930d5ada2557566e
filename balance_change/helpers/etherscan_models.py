"""Pydantic models for Etherscan proxy requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EtherscanProxyRequest(BaseModel):
    """Query parameters for a call to the Etherscan proxy module."""

    module: str = Field(default="proxy", frozen=True)
    action: str = Field(..., description="Proxied JSON-RPC method name")
    apikey: str = Field(..., description="Etherscan API key")
    chainid: int | None = Field(default=None, description="Chain id (v2 API)")

    def to_params(self) -> dict[str, str]:
        """Render the request as HTTP query parameters, dropping unset values."""
        return {
            key: str(value).lower() if isinstance(value, bool) else str(value)
            for key, value in self.model_dump(exclude_none=True).items()
        }


class EthBlockNumberRequest(EtherscanProxyRequest):
    """Etherscan request for eth_blockNumber."""

    action: str = Field(default="eth_blockNumber", frozen=True)


class EthGetBlockByNumberRequest(EtherscanProxyRequest):
    """Etherscan request for eth_getBlockByNumber with full transactions."""

    action: str = Field(default="eth_getBlockByNumber", frozen=True)
    tag: str = Field(..., description="Block number as hex tag")
    boolean: bool = Field(default=True, description="Include full transactions")


class EtherscanResponse(BaseModel):
    """Response envelope returned by Etherscan.

    Proxy calls answer in JSON-RPC shape (``jsonrpc``/``id``/``result``),
    while account-level failures such as throttling use
    ``status``/``message``/``result``.
    """

    status: str | None = None
    message: str | None = None
    result: Any = None
    error: dict[str, Any] | str | None = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @property
    def is_rate_limited(self) -> bool:
        """Whether Etherscan refused the call because of its rate limit."""
        if self.status != "0":
            return False
        text = f"{self.message or ''} {self.result if isinstance(self.result, str) else ''}"
        return "rate limit" in text.lower()


__all__ = [
    "EthBlockNumberRequest",
    "EthGetBlockByNumberRequest",
    "EtherscanProxyRequest",
    "EtherscanResponse",
]
