import pytest

from mermaid_validator.validators import ValidationEngine


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()
