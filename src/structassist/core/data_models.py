"""
Data Models for StructAssist - Load Cases, Combinations and Structural Elements

Records mirror the camelCase documents exchanged with the chat, form and
persistence layers; ``from_dict``/``to_dict`` translate between the two.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, Dict, Any, Type

from .exceptions import InvalidAppliedLoadError, InvalidLoadCombinationError


class LoadType(Enum):
    """Shape of a load applied to a beam"""
    UDL = "UDL"
    POINT_LOAD = "Point Load"
    TRAPEZOIDAL_LOAD = "Trapezoidal Load"


class LoadCaseType(Enum):
    """Physical origin of a force"""
    DEAD = "Dead"
    LIVE = "Live"
    SNOW = "Snow"
    WIND = "Wind"
    SEISMIC = "Seismic"
    RAIN = "Rain"
    CONSTRUCTION = "Construction"
    TEMPERATURE = "Temperature"
    SETTLEMENT = "Settlement"
    OTHER = "Other"


class CombinationType(Enum):
    """Load combination categories"""
    ULTIMATE = "Ultimate"
    SERVICEABILITY = "Serviceability"
    OTHER = "Other"
    REACTION = "Reaction"


class SupportFixityType(Enum):
    """Support fixity of a beam support"""
    PINNED = "Pinned"
    ROLLER = "Roller"
    FIXED = "Fixed"
    FREE = "Free"


def _coerce_enum(enum_cls: Type[Enum], value: Any, error_cls: Type[ValueError], field_name: str) -> Enum:
    """Return ``value`` as a member of ``enum_cls``, accepting the wire string."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise error_cls(f"Invalid {field_name} '{value}'. Must be one of: {valid}")


def _to_float(value: Any, error_cls: Type[ValueError], field_name: str) -> float:
    if isinstance(value, bool):
        raise error_cls(f"{field_name} must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise error_cls(f"{field_name} must be numeric, got {value!r}")


def _as_list(value: Any, error_cls: Type[ValueError], field_name: str) -> List[Any]:
    """Absent collections are empty; anything else must already be a list."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise error_cls(f"{field_name} must be a list, got {type(value).__name__}")
    return list(value)


@dataclass
class ForceEntry:
    """One load case's contribution to an applied load group.

    Attributes:
        magnitude: One value (UDL, point load) or two (trapezoid start/end), N or N/m
        load_case: Load case the magnitude belongs to
    """
    magnitude: List[float]
    load_case: LoadCaseType

    def __post_init__(self):
        self.load_case = _coerce_enum(LoadCaseType, self.load_case, InvalidAppliedLoadError, "loadCase")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ForceEntry":
        if not isinstance(data, dict):
            raise InvalidAppliedLoadError(f"Force entry must be a mapping, got {type(data).__name__}")
        if "loadCase" not in data:
            raise InvalidAppliedLoadError("Force entry is missing 'loadCase'")
        raw_magnitude = data.get("magnitude")
        if isinstance(raw_magnitude, (int, float)) and not isinstance(raw_magnitude, bool):
            raw_magnitude = [raw_magnitude]
        magnitude = [
            _to_float(m, InvalidAppliedLoadError, "magnitude")
            for m in _as_list(raw_magnitude, InvalidAppliedLoadError, "magnitude")
        ]
        return cls(magnitude=magnitude, load_case=data["loadCase"])

    def to_dict(self) -> Dict[str, Any]:
        return {"magnitude": list(self.magnitude), "loadCase": self.load_case.value}


@dataclass
class AppliedLoad:
    """Positioned load group whose forces differ only by load case.

    All forces share ``type`` and ``position``; only their magnitudes vary.

    Attributes:
        type: Load shape
        position: Position markers in metres, kept as strings (1 for point, 2 otherwise)
        forces: One entry per contributing load case
        description: Optional human label
    """
    type: LoadType
    position: List[str]
    forces: List[ForceEntry] = field(default_factory=list)
    description: Optional[str] = None

    def __post_init__(self):
        self.type = _coerce_enum(LoadType, self.type, InvalidAppliedLoadError, "load type")

    def position_values(self) -> List[float]:
        """Position markers converted to metres"""
        return [_to_float(p, InvalidAppliedLoadError, "position") for p in self.position]

    def load_cases(self) -> List[LoadCaseType]:
        """Load cases referenced by this group, in first-seen order"""
        seen: List[LoadCaseType] = []
        for force in self.forces:
            if force.load_case not in seen:
                seen.append(force.load_case)
        return seen

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppliedLoad":
        if not isinstance(data, dict):
            raise InvalidAppliedLoadError(f"Applied load must be a mapping, got {type(data).__name__}")
        if "type" not in data:
            raise InvalidAppliedLoadError("Applied load is missing 'type'")
        position = [str(p) for p in _as_list(data.get("position"), InvalidAppliedLoadError, "position")]
        forces = [
            ForceEntry.from_dict(f)
            for f in _as_list(data.get("forces"), InvalidAppliedLoadError, "forces")
        ]
        return cls(
            type=data["type"],
            position=position,
            forces=forces,
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.type.value,
            "position": list(self.position),
            "forces": [f.to_dict() for f in self.forces],
        }
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass
class LoadCaseFactor:
    """Factor row of a load combination.

    The multiplier applied to a matching force is ``factor * term_factor``.
    ``is_active`` of ``None`` counts as active; only ``False`` disables the row.
    """
    load_case_type: LoadCaseType
    factor: float
    term_factor: float = 1.0
    load_case_id: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = True

    def __post_init__(self):
        self.load_case_type = _coerce_enum(
            LoadCaseType, self.load_case_type, InvalidLoadCombinationError, "loadCaseType"
        )

    @property
    def active(self) -> bool:
        return self.is_active is not False

    @property
    def combined_factor(self) -> float:
        """Load factor times duration (term) factor"""
        return self.factor * self.term_factor

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadCaseFactor":
        if not isinstance(data, dict):
            raise InvalidLoadCombinationError(f"Load case factor must be a mapping, got {type(data).__name__}")
        if "loadCaseType" not in data:
            raise InvalidLoadCombinationError("Load case factor is missing 'loadCaseType'")
        if "factor" not in data:
            raise InvalidLoadCombinationError("Load case factor is missing 'factor'")
        return cls(
            load_case_type=data["loadCaseType"],
            factor=_to_float(data["factor"], InvalidLoadCombinationError, "factor"),
            term_factor=_to_float(data.get("termFactor", 1.0), InvalidLoadCombinationError, "termFactor"),
            load_case_id=data.get("loadCaseId"),
            description=data.get("description"),
            is_active=data.get("isActive"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "loadCaseType": self.load_case_type.value,
            "factor": self.factor,
            "termFactor": self.term_factor,
        }
        if self.load_case_id is not None:
            result["loadCaseId"] = self.load_case_id
        if self.description is not None:
            result["description"] = self.description
        if self.is_active is not None:
            result["isActive"] = self.is_active
        return result


@dataclass
class CombinedLoad:
    """Factored load produced for one applied load under one combination"""
    type: LoadType
    name: str
    position: List[str]
    magnitude: List[float]

    def __post_init__(self):
        self.type = _coerce_enum(LoadType, self.type, InvalidAppliedLoadError, "load type")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CombinedLoad":
        return cls(
            type=data["type"],
            name=data.get("name", ""),
            position=[str(p) for p in _as_list(data.get("position"), InvalidAppliedLoadError, "position")],
            magnitude=[
                _to_float(m, InvalidAppliedLoadError, "magnitude")
                for m in _as_list(data.get("magnitude"), InvalidAppliedLoadError, "magnitude")
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "position": list(self.position),
            "magnitude": list(self.magnitude),
        }


@dataclass
class LoadCombination:
    """Named set of load case factors, e.g. "1.2G + 1.5Q".

    A ``REACTION`` combination with exactly one factor row is an individual
    load case combination used for per-load-case support reactions.

    Attributes:
        name: Display name
        load_case_factors: Factor rows
        id: Unique identifier, generated when missing
        description: Optional description
        is_active: ``None`` or ``True`` means active
        combination_type: Ultimate, Serviceability, Other or Reaction
        code_reference: Building code clause, e.g. "AS/NZS 1170 Eq. 4.2.1"
        is_governing: Set by the design service for the critical combination
        computed_result: Cached combined loads, one per applied load
    """
    name: str
    load_case_factors: List[LoadCaseFactor] = field(default_factory=list)
    id: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = True
    combination_type: Optional[CombinationType] = None
    code_reference: Optional[str] = None
    is_governing: Optional[bool] = None
    computed_result: Optional[List[CombinedLoad]] = None

    def __post_init__(self):
        if self.combination_type is not None:
            self.combination_type = _coerce_enum(
                CombinationType, self.combination_type, InvalidLoadCombinationError, "combinationType"
            )

    @property
    def active(self) -> bool:
        return self.is_active is not False

    @property
    def is_individual(self) -> bool:
        """True for a reaction combination isolating a single load case"""
        return (
            self.combination_type == CombinationType.REACTION
            and len(self.load_case_factors) == 1
        )

    def copy(self) -> "LoadCombination":
        """Value copy; factor rows and cached results are copied too."""
        return replace(
            self,
            load_case_factors=[replace(f) for f in self.load_case_factors],
            computed_result=(
                None if self.computed_result is None
                else [replace(c, position=list(c.position), magnitude=list(c.magnitude))
                      for c in self.computed_result]
            ),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadCombination":
        if not isinstance(data, dict):
            raise InvalidLoadCombinationError(f"Load combination must be a mapping, got {type(data).__name__}")
        computed = data.get("computedResult")
        return cls(
            name=data.get("name", ""),
            load_case_factors=[
                LoadCaseFactor.from_dict(f)
                for f in _as_list(data.get("loadCaseFactors"), InvalidLoadCombinationError, "loadCaseFactors")
            ],
            id=data.get("id") or None,
            description=data.get("description"),
            is_active=data.get("isActive"),
            combination_type=data.get("combinationType"),
            code_reference=data.get("codeReference"),
            is_governing=data.get("isGoverning"),
            computed_result=None if computed is None else [CombinedLoad.from_dict(c) for c in computed],
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "loadCaseFactors": [f.to_dict() for f in self.load_case_factors],
        }
        optional = {
            "id": self.id,
            "description": self.description,
            "isActive": self.is_active,
            "combinationType": self.combination_type.value if self.combination_type else None,
            "codeReference": self.code_reference,
            "isGoverning": self.is_governing,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        if self.computed_result is not None:
            result["computedResult"] = [c.to_dict() for c in self.computed_result]
        return result


@dataclass
class Support:
    """Support point on a beam (position in m)"""
    position: float
    fixity: SupportFixityType

    def __post_init__(self):
        self.fixity = _coerce_enum(SupportFixityType, self.fixity, ValueError, "fixity")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Support":
        return cls(position=_to_float(data["position"], ValueError, "position"), fixity=data["fixity"])

    def to_dict(self) -> Dict[str, Any]:
        return {"position": self.position, "fixity": self.fixity.value}


@dataclass
class SectionProperties:
    """Section record as stored in the section library (mm, MPa)"""
    name: str
    material: Optional[str] = None
    shape: Optional[str] = None
    material_grade: Optional[str] = None
    elastic_modulus_e: Optional[float] = None   # MPa
    d: Optional[float] = None                    # mm
    b: Optional[float] = None                    # mm
    ix: Optional[float] = None                   # mm^4
    iy: Optional[float] = None                   # mm^4
    zx: Optional[float] = None                   # mm^3
    zy: Optional[float] = None                   # mm^3
    a: Optional[float] = None                    # mm^2

    _KEYS = {
        "material": "material",
        "shape": "shape",
        "material_grade": "material_grade",
        "elastic_modulus_e": "elastic_modulus_E",
        "d": "d",
        "b": "b",
        "ix": "Ix",
        "iy": "Iy",
        "zx": "Zx",
        "zy": "Zy",
        "a": "A",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectionProperties":
        kwargs = {attr: data.get(key) for attr, key in cls._KEYS.items()}
        return cls(name=data.get("name", ""), **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        for attr, key in self._KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result


@dataclass
class StructuralElement:
    """
    Structural element with its loads, combinations and reaction mirror.
    ``reactions`` holds value copies of the individual reaction combinations.
    """
    name: str = "Untitled Element"
    type: str = "beam"
    id: Optional[str] = None
    section_name: str = ""
    span: float = 0.0           # m
    spacing: float = 0.0        # m
    section_count: int = 1

    supports: List[Support] = field(default_factory=list)
    sections: List[SectionProperties] = field(default_factory=list)

    applied_loads: List[AppliedLoad] = field(default_factory=list)
    load_combinations: List[LoadCombination] = field(default_factory=list)
    reactions: List[LoadCombination] = field(default_factory=list)

    design_parameters: Dict[str, Any] = field(default_factory=dict)
    project_id: Optional[str] = None
    governing_combination: Optional[str] = None

    def load_case_types(self) -> List[LoadCaseType]:
        """Distinct load cases across all applied loads, in first-seen order"""
        seen: List[LoadCaseType] = []
        for applied_load in self.applied_loads:
            for load_case in applied_load.load_cases():
                if load_case not in seen:
                    seen.append(load_case)
        return seen

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructuralElement":
        """Build an element from its document form"""
        return cls(
            name=data.get("name", "Untitled Element"),
            type=data.get("type", "beam"),
            id=data.get("id"),
            section_name=data.get("sectionName", ""),
            span=float(data.get("span", 0.0) or 0.0),
            spacing=float(data.get("spacing", 0.0) or 0.0),
            section_count=int(data.get("section_count", 1) or 1),
            supports=[Support.from_dict(s) for s in data.get("supports") or []],
            sections=[SectionProperties.from_dict(s) for s in data.get("sections") or []],
            applied_loads=[
                AppliedLoad.from_dict(a)
                for a in _as_list(data.get("appliedLoads"), InvalidAppliedLoadError, "appliedLoads")
            ],
            load_combinations=[
                LoadCombination.from_dict(c)
                for c in _as_list(data.get("loadCombinations"), InvalidLoadCombinationError, "loadCombinations")
            ],
            reactions=[
                LoadCombination.from_dict(r)
                for r in _as_list(data.get("reactions"), InvalidLoadCombinationError, "reactions")
            ],
            design_parameters=dict(data.get("designParameters") or {}),
            project_id=data.get("projectId"),
            governing_combination=data.get("governingCombination"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export element as dictionary for JSON serialization"""
        result: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "sectionName": self.section_name,
            "span": self.span,
            "spacing": self.spacing,
            "section_count": self.section_count,
            "supports": [s.to_dict() for s in self.supports],
            "sections": [s.to_dict() for s in self.sections],
            "appliedLoads": [a.to_dict() for a in self.applied_loads],
            "loadCombinations": [c.to_dict() for c in self.load_combinations],
            "reactions": [r.to_dict() for r in self.reactions],
        }
        if self.design_parameters:
            result["designParameters"] = dict(self.design_parameters)
        if self.id is not None:
            result["id"] = self.id
        if self.project_id is not None:
            result["projectId"] = self.project_id
        if self.governing_combination is not None:
            result["governingCombination"] = self.governing_combination
        return result
