"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, profnet.toml only contains
overrides. A fresh deployment needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: str = "profnet.db"
    echo: bool = False


class NetworkConfig(BaseModel):
    """[network] section."""

    model_config = {"frozen": True}

    # Follow only accepted edges when checking two-hop reach.
    reach_accepted_only: bool = False
