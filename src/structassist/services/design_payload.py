"""
Design service payload adapter.

Translates elements and combined loads into the JSON vocabulary of the
remote structural service:
- ``/element`` (design): load combination pattern, loads in N or N/m,
  section properties scaled by the number of plies, E in Pa
- ``/analyse`` (analysis): downward loads as negative magnitudes, E in Pa
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from structassist.combinations.load_combinations import compute_load_combination
from structassist.core.constants import (
    API_FIXITY,
    API_LOAD_TYPES_ANALYSIS,
    API_LOAD_TYPES_DESIGN,
    DEFAULT_DESIGN_PARAMETERS,
    DEFAULT_SECTION,
    FACTOR_TOLERANCE,
    GPA_TO_PA,
    MPA_TO_PA,
)
from structassist.core.data_models import (
    CombinedLoad,
    LoadCaseType,
    LoadCombination,
    LoadType,
    SectionProperties,
    StructuralElement,
)


class ApiLoadCombination(Enum):
    """Load combination patterns understood by the design service"""
    PERMANENT = "1.35G"
    ROOF_LIVE_DISTRIBUTED = "roof_distributed_1.2G+1.5Q"
    ROOF_LIVE_CONCENTRATED = "roof_concentrated_1.2G+1.5Q"
    FLOOR_LIVE_DISTRIBUTED = "floor_distributed_1.2G+1.5Q"
    FLOOR_LIVE_CONCENTRATED = "floor_concentrated_1.2G+1.5Q"
    PERMANENT_IMPOSED = "permanent_1.2G+ψlQ"
    PERMANENT_WIND_IMPOSED = "permanent_wind_imposed_1.2G+ψcQ+Wu"
    PERMANENT_WIND_REVERSAL = "permanent_wind_reversal_0.9G+Wu"
    PERMANENT_EARTHQUAKE_IMPOSED = "permanent_earthquake_imposed_G+Eu+ψcQ"
    FIRE = "fire"


def _is_approximately(a: float, b: float, tolerance: float = FACTOR_TOLERANCE) -> bool:
    return abs(a - b) <= tolerance


def _factor_of(combination: LoadCombination, load_case: LoadCaseType) -> float:
    for load_case_factor in combination.load_case_factors:
        if load_case_factor.load_case_type == load_case:
            return load_case_factor.factor
    return 0.0


def map_combination_to_api_format(combination: LoadCombination) -> ApiLoadCombination:
    """Classify a combination into the design service's pattern vocabulary.

    Matching uses the Dead/Live/Wind/Seismic load factors; the 1.2G + 1.5Q
    pattern is refined by "roof"/"floor" and "distributed"/"concentrated"
    keywords in the name or description.

    Args:
        combination: Load combination to classify

    Returns:
        Matching ApiLoadCombination (floor distributed when nothing matches)
    """
    dead = _factor_of(combination, LoadCaseType.DEAD)
    live = _factor_of(combination, LoadCaseType.LIVE)
    wind = _factor_of(combination, LoadCaseType.WIND)
    seismic = _factor_of(combination, LoadCaseType.SEISMIC)

    if (_is_approximately(dead, 1.35) and _is_approximately(live, 0)
            and _is_approximately(wind, 0) and _is_approximately(seismic, 0)):
        return ApiLoadCombination.PERMANENT

    if (_is_approximately(dead, 1.2) and _is_approximately(live, 1.5)
            and _is_approximately(wind, 0) and _is_approximately(seismic, 0)):
        text = f"{combination.name} {combination.description or ''}".lower()
        if "roof" in text and "distributed" in text:
            return ApiLoadCombination.ROOF_LIVE_DISTRIBUTED
        if "roof" in text and "concentrated" in text:
            return ApiLoadCombination.ROOF_LIVE_CONCENTRATED
        if "floor" in text and "distributed" in text:
            return ApiLoadCombination.FLOOR_LIVE_DISTRIBUTED
        if "floor" in text and "concentrated" in text:
            return ApiLoadCombination.FLOOR_LIVE_CONCENTRATED
        return ApiLoadCombination.FLOOR_LIVE_DISTRIBUTED

    if _is_approximately(dead, 1.2) and 0 < live < 1.5:
        return ApiLoadCombination.PERMANENT_IMPOSED

    if _is_approximately(dead, 1.2) and wind > 0:
        return ApiLoadCombination.PERMANENT_WIND_IMPOSED

    if _is_approximately(dead, 0.9) and wind > 0:
        return ApiLoadCombination.PERMANENT_WIND_REVERSAL

    if _is_approximately(dead, 1.0) and seismic > 0:
        return ApiLoadCombination.PERMANENT_EARTHQUAKE_IMPOSED

    if "fire" in combination.name.lower() or "fire" in (combination.description or "").lower():
        return ApiLoadCombination.FIRE

    return ApiLoadCombination.FLOOR_LIVE_DISTRIBUTED


def _scalar_or_list(values: List[float]) -> Any:
    return values[0] if len(values) == 1 else values


def design_loads(loads: List[CombinedLoad]) -> List[Dict[str, Any]]:
    """Combined loads in design service form (N, N/m; positions in m)."""
    return [
        {
            "type": API_LOAD_TYPES_DESIGN.get(load.type.value, "PointLoad_Vert"),
            "magnitude": _scalar_or_list(list(load.magnitude)),
            "position": _scalar_or_list([float(p) for p in load.position]),
        }
        for load in loads
    ]


def _scaled(value: Optional[float], count: int, default: float) -> float:
    # Missing or zero properties fall back to the default section
    scaled = (value or 0.0) * count
    return scaled or default


def design_section(section: SectionProperties, section_count: int) -> Dict[str, Any]:
    """Section in design service form; Ix, Zx and A cover all plies."""
    return {
        "name": section.name,
        "material": (section.material or DEFAULT_SECTION["material"]).lower(),
        "shape": (section.shape or DEFAULT_SECTION["shape"]).lower(),
        "grade": section.material_grade or DEFAULT_SECTION["grade"],
        "E": (section.elastic_modulus_e or DEFAULT_SECTION["E"]) * MPA_TO_PA,
        "height": section.d or DEFAULT_SECTION["height"],
        "width": section.b or DEFAULT_SECTION["width"],
        "Ix": _scaled(section.ix, section_count, DEFAULT_SECTION["Ix"]),
        "Iy": section.iy or DEFAULT_SECTION["Iy"],
        "Zx": _scaled(section.zx, section_count, DEFAULT_SECTION["Zx"]),
        "Zy": section.zy or DEFAULT_SECTION["Zy"],
        "A": _scaled(section.a, section_count, DEFAULT_SECTION["A"]),
    }


def transform_element_to_design_api(
    element: StructuralElement,
    combination: LoadCombination,
) -> Dict[str, Any]:
    """Build the ``/element`` design payload for one combination.

    Uses ``combination.computed_result`` when present, otherwise computes the
    combined loads from the element's applied loads.

    Args:
        element: Element being designed
        combination: Combination to design for

    Returns:
        JSON-serialisable payload
    """
    combined = combination.computed_result
    if not combined:
        combined = compute_load_combination(element.applied_loads, combination)

    parameters = dict(DEFAULT_DESIGN_PARAMETERS)
    parameters.update({
        key: value for key, value in element.design_parameters.items()
        if key in DEFAULT_DESIGN_PARAMETERS and value
    })
    parameters["materialType"] = str(parameters["materialType"]).lower()
    parameters["memberSpacing"] = element.spacing or 1.0

    return {
        "name": element.name,
        "section": element.section_name,
        "span": element.span,
        "type": (element.type or "beam").lower(),
        "spacing": element.spacing,
        "sections": [design_section(s, element.section_count) for s in element.sections],
        "supports": [
            {
                "position": support.position,
                "fixity": list(API_FIXITY[support.fixity.value]),
                "kx": None,
                "ky": None,
            }
            for support in element.supports
        ],
        "loads": design_loads(combined),
        "designParameters": {
            "Load_combination": [map_combination_to_api_format(combination).value],
            **parameters,
        },
    }


def build_analysis_payload(
    element: StructuralElement,
    loads: List[CombinedLoad],
    elastic_modulus_gpa: float,
    second_moment: float,
    area: float,
) -> Dict[str, Any]:
    """Build the ``/analyse`` beam analysis payload.

    Args:
        element: Element providing span and supports
        loads: Loads to analyse (typically one combination's result)
        elastic_modulus_gpa: Modulus of elasticity (GPa)
        second_moment: Second moment of area
        area: Cross-sectional area

    Returns:
        JSON-serialisable payload with downward loads as negative values
    """
    api_loads = []
    for load in loads:
        if load.type == LoadType.TRAPEZOIDAL_LOAD:
            magnitude: Any = [-m for m in load.magnitude]
        else:
            magnitude = -load.magnitude[0] if load.magnitude else 0.0

        if load.type == LoadType.POINT_LOAD:
            position: Any = float(load.position[0])
        else:
            position = [float(p) for p in load.position]

        api_loads.append({
            "type": API_LOAD_TYPES_ANALYSIS[load.type.value],
            "magnitude": magnitude,
            "position": position,
        })

    return {
        "span": element.span,
        "E": elastic_modulus_gpa * GPA_TO_PA,
        "I": second_moment,
        "A": area,
        "supports": [
            {"position": s.position, "fixity": list(API_FIXITY[s.fixity.value])}
            for s in element.supports
        ],
        "loads": api_loads,
    }


_ARRAY_FIELDS = ("bending_moment", "shear_force", "normal_force", "deflection", "x_values")
_EXTREMA_FIELDS = ("max_bending", "max_shear", "max_deflection")


def parse_analysis_output(response: Dict[str, Any]) -> Dict[str, Any]:
    """Normalise an ``/analyse`` response so every expected field is present."""
    output: Dict[str, Any] = {"reactions": response.get("reactions") or {}}
    for name in _EXTREMA_FIELDS:
        value = response.get(name)
        output[name] = value if isinstance(value, list) else [0, 0]
    for name in _ARRAY_FIELDS:
        value = response.get(name)
        output[name] = value if isinstance(value, list) else []
    return output
