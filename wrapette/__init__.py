"""Wrapette: compose async units into one merged result.

Main components:
* `Wrap`: Composite unit loading its children in parallel / series / eventually groups
* `Unit`: Minimal base class for children (`load(context) -> result`)
* `unit` / `from_callback`: Turn plain or callback-style functions into units
* `load_wrap`: Build a Wrap from a YAML definition
"""

# Version info
__version__ = "0.1.0"

# Core components
from wrapette.core.wrap import Wrap
from wrapette.core.flow import Flow, Group, Registration
from wrapette.core.executor import Executor
from wrapette.core.result import Result
from wrapette.core.unit import (
    UNSET,
    Unit,
    FunctionUnit,
    Container,
    CallbackUnit,
    unit,
    from_callback,
)
from wrapette.core.capabilities import (
    Loadable,
    Identifiable,
    Placeable,
    Editable,
    Capabilities,
)

# Events
from wrapette.utils.events import (
    Event,
    PreLoad,
    ChildLoaded,
    GroupFinished,
    PostLoad,
    AttributeChanged,
    EventBus,
)

# Config
from wrapette.yaml_loader import load_wrap

__all__ = [
    # Core classes
    "Wrap",
    "Flow",
    "Group",
    "Registration",
    "Executor",
    "Result",
    "Unit",
    "FunctionUnit",
    "Container",
    "CallbackUnit",
    "UNSET",

    # Functions
    "unit",
    "from_callback",
    "load_wrap",

    # Capabilities
    "Loadable",
    "Identifiable",
    "Placeable",
    "Editable",
    "Capabilities",

    # Events
    "Event",
    "PreLoad",
    "ChildLoaded",
    "GroupFinished",
    "PostLoad",
    "AttributeChanged",
    "EventBus",
]
