"""Essential (storage) and full (editor) views of a flow.

The essential view is what gets persisted and linted. The full view adds
editor state that is rebuilt on load and dropped on save.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Position(WireModel):
    x: float
    y: float


class DataType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    PARAGRAPH = "paragraph"


class InputType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    PARAGRAPH = "paragraph"
    SELECT = "select"
    SEARCH_SELECT = "searchSelect"
    BUTTON = "button"
    OBJECT = "object"
    PARAM_MATRIX = "paramMatrix"


class HandleColor(str, Enum):
    SKY = "sky"
    EMERALD = "emerald"
    AMBER = "amber"
    ROSE = "rose"


class NodeCollection(str, Enum):
    INPUT = "input"
    COMPUTE = "compute"
    TRADE = "trade"
    CORE = "core"


class EdgeStyle(str, Enum):
    DEFAULT = "default"
    STEP = "step"
    SMOOTHSTEP = "smoothstep"
    STRAIGHT = "straight"


class HandleConfig(WireModel):
    color: HandleColor
    style: Optional[Dict[str, Any]] = None


class SelectOption(WireModel):
    value: str
    label: str
    disabled: Optional[bool] = None
    tooltip: Optional[str] = None


class EssentialInput(WireModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    type: DataType = DataType.TEXT
    input_type: InputType = Field(default=InputType.TEXT, alias="inputType")
    required: bool = False
    placeholder: str = ""
    handle: Optional[HandleConfig] = None
    value: Any = None
    options: Optional[List[Union[str, SelectOption]]] = None
    min: Optional[float] = None
    max: Optional[float] = None


class EssentialOutput(WireModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    type: DataType = DataType.TEXT
    handle: Optional[HandleConfig] = None
    description: Optional[str] = None


class EssentialNodeData(WireModel):
    title: str = ""
    description: str = ""
    collection: NodeCollection = NodeCollection.CORE
    inputs: List[EssentialInput] = Field(default_factory=list)
    outputs: List[EssentialOutput] = Field(default_factory=list)


class EssentialNode(WireModel):
    id: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    position: Position
    version: Optional[str] = None
    data: EssentialNodeData = Field(default_factory=EssentialNodeData)


class EssentialEdge(WireModel):
    id: str = ""
    source: str
    target: str
    source_handle: str = Field(..., alias="sourceHandle")
    target_handle: str = Field(..., alias="targetHandle")


class EssentialFlow(WireModel):
    name: str = ""
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")
    nodes: List[EssentialNode] = Field(default_factory=list)
    edges: List[EssentialEdge] = Field(default_factory=list)


class InstanceState(WireModel):
    has_loaded: bool = Field(default=False, alias="hasLoaded")
    error: Optional[str] = None
    last_load_time: Optional[float] = Field(default=None, alias="lastLoadTime")


class FullInput(EssentialInput):
    is_deleted: bool = Field(default=False, alias="isDeleted")
    disabled: bool = False
    instance_state: InstanceState = Field(default_factory=InstanceState, alias="_instanceState")


class FullOutput(EssentialOutput):
    is_deleted: bool = Field(default=False, alias="isDeleted")


class MenuItem(WireModel):
    key: str
    label: str
    danger: Optional[bool] = None


class HandleSignal(WireModel):
    handle_id: str = Field(..., alias="handleId")
    handle_type: str = Field(..., alias="handleType")
    data: Any = None
    timestamp: str
    from_node: Optional[str] = Field(default=None, alias="fromNode")
    to_node: Optional[str] = Field(default=None, alias="toNode")


class FullEdge(EssentialEdge):
    type: EdgeStyle = EdgeStyle.DEFAULT
    animated: bool = False


class FullNodeData(EssentialNodeData):
    inputs: List[FullInput] = Field(default_factory=list)
    outputs: List[FullOutput] = Field(default_factory=list)
    id: str = ""
    edges: List[FullEdge] = Field(default_factory=list)
    menu_items: List[MenuItem] = Field(default_factory=list, alias="menuItems")
    is_deep_edit: bool = Field(default=False, alias="isDeepEdit")
    is_flow_executing: bool = Field(default=False, alias="isFlowExecuting")
    is_stopping: bool = Field(default=False, alias="isStopping")
    signals: List[HandleSignal] = Field(default_factory=list)


class FullNode(EssentialNode):
    data: FullNodeData = Field(default_factory=FullNodeData)
    class_name: str = Field(default="", alias="className")
    width: Optional[float] = None
    height: Optional[float] = None
    selected: bool = False
    dragging: bool = False
    position_absolute: Optional[Position] = Field(default=None, alias="positionAbsolute")


class FullFlow(EssentialFlow):
    nodes: List[FullNode] = Field(default_factory=list)
    edges: List[FullEdge] = Field(default_factory=list)
