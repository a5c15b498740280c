"""Typed node-type contracts."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeCategory(str, Enum):
    INPUT = "input"
    COMPUTE = "compute"
    TRADE = "trade"
    OUTPUT = "output"


class NodeTypeContract(BaseModel):
    """Declared inputs and outputs for one node type."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., min_length=1)
    category: NodeCategory
    description: str = ""
    required_inputs: List[str] = Field(default_factory=list)
    optional_inputs: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=list)
    # Input whose value lists extra, user-named inputs (e.g. code_node variables).
    dynamic_inputs_field: Optional[str] = None

    @model_validator(mode="after")
    def validate_input_sets(self) -> "NodeTypeContract":
        overlap = set(self.required_inputs) & set(self.optional_inputs)
        if overlap:
            raise ValueError(
                f"node type '{self.type}' declares inputs as both required and optional: "
                f"{', '.join(sorted(overlap))}"
            )
        if self.dynamic_inputs_field and self.dynamic_inputs_field not in self.declared_inputs:
            raise ValueError(
                f"node type '{self.type}' dynamic_inputs_field '{self.dynamic_inputs_field}' "
                "is not a declared input"
            )
        return self

    @property
    def declared_inputs(self) -> set[str]:
        return set(self.required_inputs) | set(self.optional_inputs)

    @property
    def declared_outputs(self) -> set[str]:
        return set(self.outputs)
