from .fakes import (
    DummyS3,
    FakeProvider,
    NoopLimiter,
    item_stub,
    outfit_json,
)

__all__ = [
    "DummyS3",
    "FakeProvider",
    "NoopLimiter",
    "item_stub",
    "outfit_json",
]
