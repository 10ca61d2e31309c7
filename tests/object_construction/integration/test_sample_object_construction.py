"""Typed object construction against the sample company model."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from schema_typegraph.configuration import load_schema_source
from schema_typegraph.object_construction import TypedInstance
from schema_typegraph.schema_sources import load_model


def _samples() -> Path:
    return Path(__file__).resolve().parents[3] / "samples"


def test_sample_manager_builds_full_instance_tree() -> None:
    model = load_model(load_schema_source(_samples() / "company_model.xml"))
    data = json.loads((_samples() / "manager.json").read_text(encoding="utf-8"))

    manager = model.construct("Manager", data)

    assert manager.get("name") == "Asha"
    assert manager.get("age") == 42
    assert manager.get("startDate") == date(2019, 4, 1)
    address = manager.get("address")
    assert isinstance(address, TypedInstance)
    assert address.get("postcode") == "CB1 2AB"
    reports = manager.get("reports")
    assert isinstance(reports, tuple)
    assert [(report.class_name, report.get("name")) for report in reports] == [
        ("Employee", "Bo"),
        ("Manager", "Cy"),
    ]
    assert reports[1].get("title") == "Team Lead"


def test_namespace_qualified_class_names_construct() -> None:
    model = load_model(load_schema_source(_samples() / "company_model.yaml"))

    company = model.construct(
        "org.example.company.Company",
        {"name": "Acme", "vatNumber": "123456789012", "departments": [{"name": "Sales"}]},
    )

    assert company.class_name == "Company"
    assert company.get("vatNumber") == 123456789012
    (sales,) = company.get("departments")  # type: ignore[misc]
    assert sales.class_name == "Department"
