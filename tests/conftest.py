"""
Shared fixtures for grouping engine tests.
Small, controlled datasets with known groups and orderings.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import pytest

from virtualgroups.core.columns import Column
from virtualgroups.core.sources import ListSource
from virtualgroups.core.virtual_groups import VirtualGroupsImpl


@dataclass
class Person:
    name: str
    dept: Optional[str]
    year: Optional[int]


@pytest.fixture
def people() -> List[Person]:
    """
    Amy (Eng, 2020), Bob (Eng, 2019), Cara (Sales, 2021).
    Grouped by dept and sorted by year: Eng → [Bob, Amy], Sales → [Cara].
    """
    return [
        Person("Amy", "Eng", 2020),
        Person("Bob", "Eng", 2019),
        Person("Cara", "Sales", 2021),
    ]


@pytest.fixture
def dept_column() -> Column:
    return Column("Dept", aspect_name="dept")


@pytest.fixture
def year_column() -> Column:
    return Column("Year", aspect_name="year")


@pytest.fixture
def name_column() -> Column:
    return Column("Name", aspect_name="name")


@pytest.fixture
def engine(people) -> VirtualGroupsImpl:
    return VirtualGroupsImpl(ListSource(people))


@pytest.fixture
def people_records() -> List[dict]:
    return [
        {"name": "Amy", "dept": "Eng", "year": 2020},
        {"name": "Bob", "dept": "Eng", "year": 2019},
        {"name": "Cara", "dept": "Sales", "year": 2021},
    ]


@pytest.fixture
def people_json(tmp_path, people_records) -> Path:
    """JSON file with the three people records."""
    path = tmp_path / "people.json"
    path.write_text(json.dumps(people_records), encoding="utf-8")
    return path


@pytest.fixture
def people_csv(tmp_path) -> Path:
    """CSV file with the three people records, plus one with an empty dept."""
    path = tmp_path / "people.csv"
    path.write_text(
        "name,dept,year\n"
        "Amy,Eng,2020\n"
        "Bob,Eng,2019\n"
        "Cara,Sales,2021\n"
        "Dan,,2018\n",
        encoding="utf-8"
    )
    return path
