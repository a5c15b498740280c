"""Node-type contract registry."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import ValidationError

from flowlint.settings import settings

from .contracts import NodeCategory, NodeTypeContract

logger = logging.getLogger(__name__)


class RegistryLoadError(ValueError):
    """Raised when a registry file cannot be turned into contracts."""


def _contract(
    type_: str,
    category: NodeCategory,
    description: str,
    required: list[str],
    optional: list[str],
    outputs: list[str],
    dynamic_inputs_field: str | None = None,
) -> NodeTypeContract:
    return NodeTypeContract(
        type=type_,
        category=category,
        description=description,
        required_inputs=required,
        optional_inputs=optional,
        outputs=outputs,
        dynamic_inputs_field=dynamic_inputs_field,
    )


def _builtin_contracts() -> list[NodeTypeContract]:
    return [
        _contract(
            "binance_price_node",
            NodeCategory.INPUT,
            "Get Binance market data for specified trading pairs",
            ["symbol", "interval"],
            ["limit"],
            ["current_price", "kline_data"],
        ),
        _contract(
            "dataset_input_node",
            NodeCategory.INPUT,
            "Load dataset from user's Google Sheets",
            ["doc_link"],
            [],
            ["data"],
        ),
        _contract(
            "rss_listener_node",
            NodeCategory.INPUT,
            "Get information from RSS feeds",
            ["route"],
            ["parameters", "keywords"],
            ["feeds"],
        ),
        _contract(
            "x_listener_node",
            NodeCategory.INPUT,
            "Monitor X (formerly Twitter) accounts",
            ["accounts"],
            ["keywords"],
            ["latest tweets"],
        ),
        _contract(
            "ai_model_node",
            NodeCategory.COMPUTE,
            "Run AI models for analysis and generation",
            ["model", "prompt"],
            ["parameters"],
            ["ai_response"],
        ),
        _contract(
            "code_node",
            NodeCategory.COMPUTE,
            "Execute custom Python code",
            ["python_code"],
            ["input_data"],
            ["output_data", "debug_output"],
            dynamic_inputs_field="input_data",
        ),
        _contract(
            "swap_node",
            NodeCategory.TRADE,
            "Process swap operations and execute swaps",
            ["from_token", "to_token", "chain", "vault_address"],
            ["amount_in_percentage", "amount_in_human_readble", "slippery"],
            ["trade_receipt"],
        ),
        _contract(
            "buy_node",
            NodeCategory.TRADE,
            "Process buy signals and execute buy operations",
            ["buy_token", "base_token", "vault_address", "chain"],
            ["order_type", "limited_price", "amount_in_percentage", "amount_in_human_readble"],
            ["trade_receipt"],
        ),
        _contract(
            "sell_node",
            NodeCategory.TRADE,
            "Process sell signals and execute sell operations",
            ["sell_token", "base_token", "vault_address", "chain"],
            ["order_type", "limited_price", "amount_in_percentage", "amount_in_human_readble"],
            ["trade_receipt"],
        ),
        _contract(
            "vault_node",
            NodeCategory.TRADE,
            "Display user's vault information",
            ["vault_address", "chain"],
            [],
            ["vault_balance", "vault_address", "chain"],
        ),
        _contract(
            "dataset_output_node",
            NodeCategory.OUTPUT,
            "Save data to user's Google Sheets",
            ["doc_link", "data"],
            [],
            [],
        ),
        _contract(
            "telegram_sender_node",
            NodeCategory.OUTPUT,
            "Send messages to Telegram",
            ["account_to_send", "messages"],
            [],
            [],
        ),
    ]


@dataclass(frozen=True)
class NodeTypeRegistry:
    """Immutable lookup table from node type id to its contract."""

    contracts: Mapping[str, NodeTypeContract] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "contracts", MappingProxyType(dict(self.contracts)))

    @classmethod
    def from_contracts(cls, contracts: Iterable[NodeTypeContract]) -> "NodeTypeRegistry":
        table: dict[str, NodeTypeContract] = {}
        for contract in contracts:
            if contract.type in table:
                raise RegistryLoadError(f"duplicate node type in registry: {contract.type}")
            table[contract.type] = contract
        return cls(contracts=table)

    @classmethod
    def default(cls) -> "NodeTypeRegistry":
        return cls.from_contracts(_builtin_contracts())

    @classmethod
    def from_settings(cls) -> "NodeTypeRegistry":
        """The registry file named in settings, or the built-in contracts."""
        registry_file = settings.registry_file_path
        if registry_file is None:
            return cls.default()
        return cls.from_yaml(registry_file)

    @classmethod
    def from_payload(cls, payload: Any) -> "NodeTypeRegistry":
        if not isinstance(payload, dict) or not isinstance(payload.get("node_types"), list):
            raise RegistryLoadError("registry payload must contain a 'node_types' list")
        try:
            contracts = [NodeTypeContract.model_validate(item) for item in payload["node_types"]]
        except ValidationError as exc:
            raise RegistryLoadError(str(exc)) from exc
        return cls.from_contracts(contracts)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "NodeTypeRegistry":
        file_path = Path(path).expanduser().resolve()
        if not file_path.exists():
            raise FileNotFoundError(f"Node type registry not found at {file_path}")

        with file_path.open("r", encoding="utf-8") as handle:
            try:
                payload = yaml.safe_load(handle) or {}
            except (yaml.YAMLError, UnicodeDecodeError) as exc:
                raise RegistryLoadError(f"invalid registry file {file_path}: {exc}") from exc

        registry = cls.from_payload(payload)
        logger.info("loaded %d node type contracts from %s", len(registry), file_path)
        return registry

    def get(self, node_type: str) -> NodeTypeContract | None:
        return self.contracts.get(node_type)

    def supported_types(self) -> list[str]:
        return list(self.contracts)

    def with_contract(self, contract: NodeTypeContract) -> "NodeTypeRegistry":
        """Return a new registry with ``contract`` added or replaced."""
        table = dict(self.contracts)
        table[contract.type] = contract
        return NodeTypeRegistry(contracts=table)

    def __contains__(self, node_type: object) -> bool:
        return node_type in self.contracts

    def __len__(self) -> int:
        return len(self.contracts)
