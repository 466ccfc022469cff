"""
Shared fixtures: reference tables loaded once per session.
"""

import pytest

from reference_data.asme_b36_10 import load_pipe_schedules
from reference_data.material_stress import load_material_stress_table


@pytest.fixture(scope="session")
def stress_table():
    return load_material_stress_table()


@pytest.fixture(scope="session")
def pipe_table():
    return load_pipe_schedules()
