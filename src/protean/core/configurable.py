# src/protean/core/configurable.py
"""Augmenting types with a property contract and a one-shot configure().

Two moments matter:

Augment:
    augment(cls) builds cls's PropertyContract from its `properties`
    declaration, attaches configure() to its instances and installs an
    __init_subclass__ hook.

Extend:
    When Python creates a subclass of an augmented type, the hook first runs
    author-supplied extension logic (the __init_subclass__ it wrapped, then
    each base's on_extended(subclass) classmethod), and only then merges the
    bases' contracts with the subclass's own declaration. The hook is
    inherited, so the chain continues through every level of derivation.

Classes that override __init_subclass__ below an augmented class must call
super().__init_subclass__(**kwargs), as with any cooperative hook.

Example:
    class Resource(Configurable):
        properties = ("!type", "category")

        def __init__(self, spec=None):
            self.category = "misc"
            super().__init__(spec)

    class Document(Resource):
        properties = ("!title",)

    Document.properties.required == ("type", "title")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

import structlog

from protean.contracts.errors import MissingRequiredPropertyError
from protean.contracts.properties import PropertyContract, RawDeclaration
from protean.core.config import ProteanSettings, get_settings

# Bound to stdlib logging: silent until the application configures handlers
logger = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)

C = TypeVar("C", bound=type)

# Class attribute holding the settings a type was augmented with.
# Inherited by subclasses, so it doubles as the "is augmented" marker.
_SETTINGS_ATTR = "__protean_settings__"

# Set on a subclass once its contract has been merged. Guards against a
# second merge when several augmented roots share one MRO.
_MERGED_ATTR = "_protean_contract_merged"


def is_augmented(obj: Any) -> bool:
    cls = obj if isinstance(obj, type) else type(obj)
    return isinstance(getattr(cls, _SETTINGS_ATTR, None), ProteanSettings)


def get_contract(obj: Any) -> PropertyContract:
    """Return the PropertyContract of an augmented type or of its instance.

    Raises:
        TypeError: If the type was never augmented
    """
    cls = obj if isinstance(obj, type) else type(obj)
    contract = getattr(cls, "properties", None)
    if not is_augmented(cls) or not isinstance(contract, PropertyContract):
        raise TypeError(f"{cls.__qualname__} is not augmented with a property contract")
    return contract


def _settings_of(cls: type) -> ProteanSettings:
    settings: ProteanSettings = getattr(cls, _SETTINGS_ATTR)
    return settings


def _own_declaration(cls: type) -> RawDeclaration | None:
    """The `properties` written in cls's own class body, if any."""
    declaration: RawDeclaration | None = cls.__dict__.get("properties")
    return declaration


def augment(cls: C, *, settings: ProteanSettings | None = None) -> C:
    """Attach a property contract and configure() to `cls`.

    Usable directly or as a class decorator. Augmenting a type that is
    already augmented (itself or through a base) returns it unchanged.

    Args:
        cls: The type to augment, modified in place
        settings: Marker and naming settings; defaults to get_settings()

    Returns:
        cls
    """
    if is_augmented(cls):
        return cls

    settings = settings or get_settings()
    declaration = _own_declaration(cls)
    if declaration is None:
        declaration = getattr(cls, "properties", None)

    contract = PropertyContract.from_declaration(declaration, marker=settings.required_marker)

    setattr(cls, _SETTINGS_ATTR, settings)
    cls.properties = contract  # type: ignore[attr-defined]
    if getattr(cls, "configure", None) is None:
        cls.configure = configure  # type: ignore[attr-defined]
    _install_extension_hook(cls)

    logger.debug(
        "type_augmented",
        type=cls.__qualname__,
        required=list(contract.required),
        optional=list(contract.optional),
    )
    return cls


def _install_extension_hook(root: type) -> None:
    """Install the extend hook as root.__init_subclass__.

    An __init_subclass__ defined directly on root is wrapped and still runs
    first; otherwise the next one in the subclass's MRO runs first.
    """
    previous = root.__dict__.get("__init_subclass__")

    def __init_subclass__(subclass: type, **kwargs: Any) -> None:
        if previous is not None:
            previous.__get__(None, subclass)(**kwargs)
        else:
            super(root, subclass).__init_subclass__(**kwargs)

        if _MERGED_ATTR in subclass.__dict__:
            return
        _run_extension_callbacks(subclass)
        _extend(subclass)

    root.__init_subclass__ = classmethod(__init_subclass__)  # type: ignore[assignment]


def _extension_callbacks(subclass: type) -> list[Callable[[type], None]]:
    """Each augmented base's on_extended, in __bases__ order, without repeats."""
    callbacks: list[Callable[[type], None]] = []
    seen: set[Any] = set()
    for base in subclass.__bases__:
        if not is_augmented(base):
            continue
        callback = getattr(base, "on_extended", None)
        if callback is None:
            continue
        key = getattr(callback, "__func__", callback)
        if key in seen:
            continue
        seen.add(key)
        callbacks.append(callback)
    return callbacks


def _run_extension_callbacks(subclass: type) -> None:
    for callback in _extension_callbacks(subclass):
        callback(subclass)


def _extend(subclass: type) -> None:
    """Merge the augmented bases' contracts with subclass's own declaration."""
    settings = _settings_of(subclass)
    marker = settings.required_marker

    superprops: tuple[str, ...] = ()
    for base in subclass.__bases__:
        if is_augmented(base):
            superprops += get_contract(base).to_declaration(marker)

    merged = PropertyContract.from_declaration(superprops, marker=marker).merge(
        _own_declaration(subclass),
        marker=marker,
    )

    subclass.properties = merged  # type: ignore[attr-defined]
    setattr(subclass, _MERGED_ATTR, True)

    logger.debug(
        "contract_extended",
        type=subclass.__qualname__,
        bases=[base.__qualname__ for base in subclass.__bases__],
        required=list(merged.required),
        optional=list(merged.optional),
    )


def _disarmed(spec: Mapping[str, Any] | None = None) -> None:
    """configure() after the first call: does nothing."""


def configure(self: Any, spec: Mapping[str, Any] | None = None) -> None:
    """Validate required properties and copy recognised spec entries onto self.

    Attached as the `configure` method of augmented types; call it once at
    the end of __init__. A required property is satisfied when it is a key of
    `spec` or when self already holds a non-None value for it. Keys that are
    not property names are ignored. After the first call, configure() on the
    same instance is a no-op.

    Args:
        spec: Mapping of property name to value; None means empty

    Raises:
        MissingRequiredPropertyError: If a required property is unresolved.
            Nothing is assigned in that case.
    """
    if spec is None:
        spec = {}

    cls = type(self)
    contract = get_contract(cls)

    for name in contract.required:
        if name in spec:
            continue
        if getattr(self, name, None) is None:
            type_name = cls.__name__ or _settings_of(cls).anonymous_label
            logger.debug("required_property_missing", type=type_name, property=name)
            raise MissingRequiredPropertyError(type_name, name)

    assigned = [name for name in contract if name in spec]
    for name in assigned:
        setattr(self, name, spec[name])

    self.configure = _disarmed

    logger.debug("instance_configured", type=cls.__qualname__, assigned=assigned)


class Configurable:
    """Base class for types configured from a spec mapping.

    Subclasses declare `properties` (required names prefixed with "!") and
    get a merged contract automatically. The default __init__ calls
    configure(spec); subclasses that set defaults do so before calling
    super().__init__(spec).
    """

    properties: ClassVar[Any] = ()

    if TYPE_CHECKING:

        def configure(self, spec: Mapping[str, Any] | None = None) -> None: ...

    def __init__(self, spec: Mapping[str, Any] | None = None) -> None:
        self.configure(spec)


augment(Configurable)
