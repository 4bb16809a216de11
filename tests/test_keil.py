from __future__ import annotations

from datetime import date

from fakes import FakeCrudRepo, TODAY
from src.erp_dashboard.erp_dashboard.core.enums import AppRole
from src.erp_dashboard.erp_dashboard.crud.service import CrudService
from src.erp_dashboard.erp_dashboard.keil.resources import KEIL_COLLECTIONS, KEIL_HCE, KEIL_ROUTES, with_km_run


def _service(resource, rows=None, options=None):
    repo = FakeCrudRepo(rows, options=options)
    return CrudService(repo, resource, clock=lambda: TODAY), repo


def test_collection_number_is_daily():
    svc, repo = _service(KEIL_COLLECTIONS, [{"collection_number": "COL-20240315-001"}])
    rid = svc.create(
        current_role=AppRole.DATA_ENTRY,
        form={"collection_date": "2024-03-15", "route_id": "1", "start_km": "1200", "end_km": "1264.5",
              "total_weight": "310.5", "total_bags": "42"},
    )
    row = repo.rows[rid]
    assert row["collection_number"] == "COL-20240315-002"
    assert row["route_id"] == 1
    assert row["total_weight"] == 310.5


def test_km_run_is_end_minus_start():
    assert with_km_run({"start_km": 1200, "end_km": 1264.5})["km_run"] == 64.5
    assert with_km_run({"start_km": None, "end_km": None})["km_run"] == 0.0


def test_collection_summary_counts_only_today():
    svc, _ = _service(
        KEIL_COLLECTIONS,
        [
            {"collection_date": TODAY, "total_weight": 120.5, "total_bags": 10},
            {"collection_date": TODAY, "total_weight": 80, "total_bags": 6},
            {"collection_date": date(2024, 3, 14), "total_weight": 500, "total_bags": 40},
        ],
        options={"routes": [{"id": 1, "label": "R1 - North"}, {"id": 2, "label": "R2 - South"}]},
    )
    stats = svc.summary(svc.list_rows(), svc.options())
    assert [(s.title, s.value) for s in stats] == [
        ("Today's Collections", 2),
        ("Total Weight (kg)", 200.5),
        ("Total Bags", 16.0),
        ("Active Routes", 2),
    ]


def test_routes_live_under_the_keil_section():
    svc, repo = _service(KEIL_ROUTES)
    rid = svc.create(current_role=AppRole.MANAGER, form={"route_code": "R-01", "route_name": "Hubli North"})
    assert repo.rows[rid]["route_name"] == "Hubli North"
    assert KEIL_ROUTES.url_path == "/keil/routes"
    assert KEIL_ROUTES.section_title == "KEIL Operations"


def test_hce_beds_default_to_zero():
    svc, repo = _service(KEIL_HCE)
    rid = svc.create(current_role=AppRole.MANAGER, form={"hce_code": "HCE-1", "hce_name": "City Clinic",
                                                        "hce_type": "clinic"})
    assert repo.rows[rid]["beds_count"] == 0.0
    assert repo.rows[rid]["route_id"] is None
