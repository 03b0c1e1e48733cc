import pytest

from cidcodec.encoding_config import (
    set_default_encoding,
)


@pytest.fixture(autouse=True)
def default_encoding():
    """Every test starts and ends with the base32 default."""
    set_default_encoding("base32")
    yield
    set_default_encoding("base32")
