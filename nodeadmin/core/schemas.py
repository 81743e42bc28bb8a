"""Parameter and reply models exchanged with the admin API.

Replies are mutable: requesters decode a result and write it into the
instance the caller allocated.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmptyArgs(BaseModel):
    model_config = ConfigDict(frozen=True)


class AliasArgs(BaseModel):
    endpoint: str
    alias: str

    model_config = ConfigDict(frozen=True)


class AliasChainArgs(BaseModel):
    chain: str
    alias: str

    model_config = ConfigDict(frozen=True)


class GetChainAliasesArgs(BaseModel):
    chain: str

    model_config = ConfigDict(frozen=True)


class SuccessResponse(BaseModel):
    success: bool = False


class GetAliasesOfChainReply(BaseModel):
    aliases: List[str] = Field(default_factory=list)

    @field_validator("aliases", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        # Go nodes encode a nil slice as null.
        if value is None:
            return []
        return value
