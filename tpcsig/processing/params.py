# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative parameter constraints via typing.Annotated.

Provides constraint marker types (``Range``, ``Options``, ``Desc``) for use
inside ``typing.Annotated`` annotations on ``WaveformProcessor`` subclasses,
plus the ``ParamSpec`` introspection class and the collection and
``__init__`` generation utilities consumed by
``WaveformProcessor.__init_subclass__``.

Usage
-----
Declare tunable parameters as class-body annotations::

    from typing import Annotated
    from tpcsig.processing.params import Range, Options, Desc

    class MyFilter(WaveformTransform):
        noise_variance: Annotated[float, Range(min=0.0),
                                  Desc('Noise variance')] = 1.0
        mode: Annotated[str, Options('mean', 'median'),
                        Desc('Flat estimate')] = 'mean'

Parameters are collected into ``cls.__param_specs__`` at class definition
time. An ``__init__`` accepting them as keyword arguments is generated
unless the class defines its own.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
import inspect
from dataclasses import dataclass
from numbers import Integral, Real
from typing import (
    Annotated,
    Any,
    Dict,
    List,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# tpcsig internal
from tpcsig.exceptions import InvalidInputError

Number = Union[int, float]


# =====================================================================
# Constraint markers  (used inside Annotated[...])
# =====================================================================

class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types.

    A class-body field is tunable when its ``Annotated`` metadata holds at
    least one ``ParamMeta`` instance.
    """


@dataclass(frozen=True)
class Range(ParamMeta):
    """Inclusive numeric bounds. Either side may be left open."""

    min: Optional[Number] = None
    max: Optional[Number] = None


class Options(ParamMeta):
    """Discrete set of allowed values.

    Parameters
    ----------
    *choices
        Allowed values. At least one is required.
    """

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


@dataclass(frozen=True)
class Desc(ParamMeta):
    """Human-readable parameter description."""

    text: str


# =====================================================================
# ParamSpec
# =====================================================================

@dataclass(frozen=True)
class ParamSpec:
    """Resolved description of one tunable parameter.

    Built from an ``Annotated`` class field by ``collect_param_specs``.

    Attributes
    ----------
    name : str
        Parameter name, also its keyword-argument key.
    param_type : type
        Declared type (``int``, ``float``, ``str``, ...).
    default : Any
        Default value; ``None`` when the parameter is required.
    has_default : bool
        Whether a class-level default was declared.
    description : str
        Text from ``Desc``.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    name: str
    param_type: type
    default: Any = None
    has_default: bool = False
    description: str = ''
    min_value: Optional[Number] = None
    max_value: Optional[Number] = None
    choices: Optional[Tuple] = None

    @property
    def required(self) -> bool:
        """True when the parameter has no default."""
        return not self.has_default

    def _check_type(self, value: Any) -> None:
        if self.param_type in (int, float) and isinstance(value, bool):
            ok = False
        elif self.param_type is int:
            ok = isinstance(value, Integral)
        elif self.param_type is float:
            ok = isinstance(value, Real)
        elif self.param_type is object:
            ok = True
        else:
            ok = isinstance(value, self.param_type)
        if not ok:
            raise TypeError(
                f"Parameter '{self.name}' must be {self.param_type.__name__}, "
                f"got {type(value).__name__}"
            )

    def validate(self, value: Any) -> None:
        """Check *value* against the declared type, bounds and choices.

        Any ``numbers.Integral`` passes for ``int`` parameters and any
        ``numbers.Real`` for ``float`` ones (numpy scalars included);
        ``bool`` never passes for numeric ones. Bounds are inclusive.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        InvalidInputError
            If *value* is out of bounds or not an allowed choice.
        """
        self._check_type(value)
        if self.min_value is not None and value < self.min_value:
            raise InvalidInputError(
                f"Parameter '{self.name}' value {value!r} is below minimum "
                f"{self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise InvalidInputError(
                f"Parameter '{self.name}' value {value!r} is above maximum "
                f"{self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise InvalidInputError(
                f"Parameter '{self.name}' value {value!r} is not in allowed "
                f"choices {self.choices!r}"
            )


# =====================================================================
# Annotation collection
# =====================================================================

_MISSING = object()


def _declared_names(cls: type) -> List[str]:
    """Annotated field names, base classes first, declaration order."""
    names: Dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        names.update(dict.fromkeys(inspect.get_annotations(klass)))
    return list(names)


def _spec_from_hint(cls: type, name: str, hint: Any) -> Optional[ParamSpec]:
    if get_origin(hint) is not Annotated:
        return None
    metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
    if not metas:
        return None

    by_kind = {type(m): m for m in metas}
    bounds = by_kind.get(Range)
    options = by_kind.get(Options)
    desc = by_kind.get(Desc)
    if bounds is not None and options is not None:
        raise TypeError(
            f"Parameter '{name}' on {cls.__qualname__}: Range and Options "
            f"are mutually exclusive."
        )

    default = getattr(cls, name, _MISSING)
    return ParamSpec(
        name=name,
        param_type=hint.__origin__,
        default=None if default is _MISSING else default,
        has_default=default is not _MISSING,
        description=desc.text if desc is not None else '',
        min_value=bounds.min if bounds is not None else None,
        max_value=bounds.max if bounds is not None else None,
        choices=options.choices if options is not None else None,
    )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build the ``ParamSpec`` tuple of *cls* from its ``Annotated`` fields.

    Fields without a ``ParamMeta`` marker are skipped. Inherited fields
    come first; a subclass redeclaring a field replaces its spec in
    place.

    Raises
    ------
    TypeError
        If a field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    specs = (
        _spec_from_hint(cls, name, hints[name])
        for name in _declared_names(cls) if name in hints
    )
    return tuple(s for s in specs if s is not None)


# =====================================================================
# __init__ generation
# =====================================================================

def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` for *param_specs*.

    Omitted parameters take their default; required ones must be given.
    Every value is validated before it is set, unknown keywords raise
    ``TypeError``, and ``__post_init__`` runs last when defined.
    """
    specs = param_specs
    known = frozenset(s.name for s in specs)

    def __init__(self, **kwargs):
        unexpected = sorted(set(kwargs) - known)
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword "
                f"arguments: {', '.join(unexpected)}"
            )
        for spec in specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec.has_default:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required keyword "
                    f"argument: '{spec.name}'"
                )
            spec.validate(value)
            setattr(self, spec.name, value)

        post_init = getattr(self, '__post_init__', None)
        if post_init is not None:
            post_init()

    kw_only = inspect.Parameter.KEYWORD_ONLY
    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [
            inspect.Parameter(s.name, kw_only, default=s.default)
            if s.has_default else inspect.Parameter(s.name, kw_only)
            for s in specs
        ]
    )
    __init__.__qualname__ = '__init__'
    return __init__
