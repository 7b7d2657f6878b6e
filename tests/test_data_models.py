"""Unit tests for load and combination data models."""

import pytest

from structassist.core.data_models import (
    AppliedLoad,
    CombinationType,
    ForceEntry,
    LoadCaseFactor,
    LoadCaseType,
    LoadCombination,
    LoadType,
    StructuralElement,
    SupportFixityType,
)
from structassist.core.exceptions import InvalidAppliedLoadError, InvalidLoadCombinationError


ELEMENT_DOCUMENT = {
    "id": "el-7",
    "name": "Roof Beam RB1",
    "type": "Roof Beam",
    "sectionName": "290x90 SG8",
    "span": 5.4,
    "spacing": 0.9,
    "section_count": 1,
    "projectId": "p-3",
    "supports": [
        {"position": 0, "fixity": "Pinned"},
        {"position": 5.4, "fixity": "Roller"},
    ],
    "sections": [{"name": "290x90 SG8", "material": "Timber", "Ix": 1.8e8, "elastic_modulus_E": 8000}],
    "appliedLoads": [
        {
            "type": "Trapezoidal Load",
            "position": ["0", "5.4"],
            "forces": [
                {"magnitude": [500, 900], "loadCase": "Dead"},
                {"magnitude": [250, 450], "loadCase": "Snow"},
            ],
            "description": "Roof",
        }
    ],
    "loadCombinations": [
        {
            "id": "c-1",
            "name": "1.2G + 1.5S",
            "combinationType": "Ultimate",
            "loadCaseFactors": [
                {"loadCaseType": "Dead", "factor": 1.2, "termFactor": 1.0},
                {"loadCaseType": "Snow", "factor": 1.5, "termFactor": 1.0, "isActive": False},
            ],
        }
    ],
}


class TestEnums:

    def test_wire_values(self):
        assert LoadType.POINT_LOAD.value == "Point Load"
        assert LoadType.TRAPEZOIDAL_LOAD.value == "Trapezoidal Load"
        assert CombinationType.REACTION.value == "Reaction"
        assert len(LoadCaseType) == 10

    def test_string_values_are_coerced(self):
        force = ForceEntry(magnitude=[1.0], load_case="Wind")
        assert force.load_case is LoadCaseType.WIND

    def test_unknown_load_case_rejected(self):
        with pytest.raises(InvalidAppliedLoadError):
            ForceEntry(magnitude=[1.0], load_case="Hail")

    def test_unknown_combination_type_rejected(self):
        with pytest.raises(InvalidLoadCombinationError):
            LoadCombination(name="x", combination_type="Extreme")


class TestAppliedLoadFromDict:

    def test_parses_forces(self):
        load = AppliedLoad.from_dict(ELEMENT_DOCUMENT["appliedLoads"][0])

        assert load.type == LoadType.TRAPEZOIDAL_LOAD
        assert load.position == ["0", "5.4"]
        assert load.position_values() == [0.0, 5.4]
        assert [f.load_case for f in load.forces] == [LoadCaseType.DEAD, LoadCaseType.SNOW]
        assert load.forces[0].magnitude == [500.0, 900.0]
        assert load.description == "Roof"

    def test_absent_forces_are_empty(self):
        load = AppliedLoad.from_dict({"type": "UDL", "position": [0, 3]})

        assert load.forces == []
        assert load.position == ["0", "3"]

    def test_scalar_magnitude_wrapped(self):
        force = ForceEntry.from_dict({"magnitude": 12, "loadCase": "Live"})
        assert force.magnitude == [12.0]

    def test_forces_must_be_a_list(self):
        with pytest.raises(InvalidAppliedLoadError):
            AppliedLoad.from_dict({"type": "UDL", "position": ["0", "1"], "forces": "Dead"})

    def test_non_numeric_magnitude_rejected(self):
        with pytest.raises(InvalidAppliedLoadError):
            ForceEntry.from_dict({"magnitude": ["heavy"], "loadCase": "Dead"})

    def test_missing_type_rejected(self):
        with pytest.raises(InvalidAppliedLoadError):
            AppliedLoad.from_dict({"position": ["0"], "forces": []})

    def test_round_trip_document(self):
        document = ELEMENT_DOCUMENT["appliedLoads"][0]
        assert AppliedLoad.from_dict(document).to_dict() == {
            "type": "Trapezoidal Load",
            "position": ["0", "5.4"],
            "forces": [
                {"magnitude": [500.0, 900.0], "loadCase": "Dead"},
                {"magnitude": [250.0, 450.0], "loadCase": "Snow"},
            ],
            "description": "Roof",
        }


class TestLoadCombinationFromDict:

    def test_parses_factors(self):
        combination = LoadCombination.from_dict(ELEMENT_DOCUMENT["loadCombinations"][0])

        assert combination.combination_type == CombinationType.ULTIMATE
        assert combination.load_case_factors[0].combined_factor == pytest.approx(1.2)
        assert combination.load_case_factors[0].is_active is None
        assert combination.load_case_factors[0].active
        assert not combination.load_case_factors[1].active
        assert combination.computed_result is None

    def test_term_factor_defaults_to_one(self):
        factor = LoadCaseFactor.from_dict({"loadCaseType": "Live", "factor": 1.5})
        assert factor.term_factor == 1.0

    def test_missing_factor_rejected(self):
        with pytest.raises(InvalidLoadCombinationError):
            LoadCaseFactor.from_dict({"loadCaseType": "Live"})

    def test_empty_id_treated_as_missing(self):
        combination = LoadCombination.from_dict({"id": "", "name": "x", "loadCaseFactors": []})
        assert combination.id is None

    def test_is_individual(self):
        combination = LoadCombination(
            name="Dead",
            combination_type=CombinationType.REACTION,
            load_case_factors=[LoadCaseFactor(load_case_type=LoadCaseType.DEAD, factor=1.0)],
        )
        assert combination.is_individual

        combination.combination_type = CombinationType.ULTIMATE
        assert not combination.is_individual

    def test_copy_is_independent(self, uls_combination):
        copied = uls_combination.copy()

        assert copied == uls_combination
        copied.load_case_factors[0].factor = 9.0
        assert uls_combination.load_case_factors[0].factor == 1.2


class TestStructuralElement:

    def test_from_dict(self):
        element = StructuralElement.from_dict(ELEMENT_DOCUMENT)

        assert element.name == "Roof Beam RB1"
        assert element.section_name == "290x90 SG8"
        assert element.supports[1].fixity == SupportFixityType.ROLLER
        assert element.sections[0].ix == 1.8e8
        assert element.sections[0].elastic_modulus_e == 8000
        assert element.reactions == []
        assert element.load_case_types() == [LoadCaseType.DEAD, LoadCaseType.SNOW]

    def test_round_trip(self):
        element = StructuralElement.from_dict(ELEMENT_DOCUMENT)
        again = StructuralElement.from_dict(element.to_dict())

        assert again == element

    def test_load_case_types_first_seen_order(self, beam_element):
        assert beam_element.load_case_types() == [
            LoadCaseType.DEAD, LoadCaseType.LIVE, LoadCaseType.WIND,
        ]
