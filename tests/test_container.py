"""Tests for container wiring."""

from nosugar.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.budget_service.ledger_service is container.ledger_service
    assert container.ledger_service.timezone_name == "UTC"
