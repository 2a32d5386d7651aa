import pytest
from struct_infer.config import Config
from struct_infer.infer import SchemaInferer
from struct_infer.interner import RecordTable


@pytest.fixture
def cfg_like():
    # deterministic, lossy merge as the default CLI does
    return Config(optional_fields=False, coerce_numeric_strings=True)


@pytest.fixture
def table():
    return RecordTable()


@pytest.fixture
def inferer(table, cfg_like):
    return SchemaInferer(table, cfg_like)
