import io

import pytest


@pytest.fixture
def stream():
    def make(data: bytes) -> io.BytesIO:
        return io.BytesIO(data)

    return make
