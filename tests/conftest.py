import sys
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from structassist.core.data_models import (
    AppliedLoad,
    CombinationType,
    ForceEntry,
    LoadCaseFactor,
    LoadCaseType,
    LoadCombination,
    LoadType,
    SectionProperties,
    StructuralElement,
    Support,
    SupportFixityType,
)


def make_factor(load_case: LoadCaseType, factor: float, term_factor: float = 1.0, **kwargs) -> LoadCaseFactor:
    return LoadCaseFactor(load_case_type=load_case, factor=factor, term_factor=term_factor, **kwargs)


@pytest.fixture
def udl_dead_live() -> AppliedLoad:
    """Floor UDL with 100 N/m dead and 50 N/m live."""
    return AppliedLoad(
        type=LoadType.UDL,
        position=["0", "4.8"],
        forces=[
            ForceEntry(magnitude=[100.0], load_case=LoadCaseType.DEAD),
            ForceEntry(magnitude=[50.0], load_case=LoadCaseType.LIVE),
        ],
        description="Floor load",
    )


@pytest.fixture
def point_wind() -> AppliedLoad:
    return AppliedLoad(
        type=LoadType.POINT_LOAD,
        position=["2.4"],
        forces=[ForceEntry(magnitude=[1000.0], load_case=LoadCaseType.WIND)],
    )


@pytest.fixture
def uls_combination() -> LoadCombination:
    """1.2G + 1.5Q"""
    return LoadCombination(
        id="uls-1",
        name="1.2G + 1.5Q",
        combination_type=CombinationType.ULTIMATE,
        load_case_factors=[
            make_factor(LoadCaseType.DEAD, 1.2),
            make_factor(LoadCaseType.LIVE, 1.5),
        ],
    )


@pytest.fixture
def beam_element(udl_dead_live, point_wind, uls_combination) -> StructuralElement:
    return StructuralElement(
        id="el-1",
        name="B1",
        type="Beam",
        section_name="240x90 SG8",
        span=4.8,
        spacing=0.6,
        section_count=2,
        supports=[
            Support(position=0.0, fixity=SupportFixityType.PINNED),
            Support(position=4.8, fixity=SupportFixityType.ROLLER),
        ],
        sections=[
            SectionProperties(
                name="240x90 SG8",
                material="Timber",
                material_grade="SG8",
                elastic_modulus_e=8000.0,
                d=240,
                b=90,
                ix=103680000.0,
                zx=864000.0,
                a=21600.0,
            )
        ],
        applied_loads=[udl_dead_live, point_wind],
        load_combinations=[uls_combination],
        project_id="proj-1",
    )
