"""
Shared fixtures.

Settings are read once and cached, so the environment is pointed at a
throwaway data dir and an in-memory database before any reliefmap module
is imported.
"""
import io
import os
import tempfile

import pytest
from PIL import Image
from PIL.TiffImagePlugin import IFDRational

os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="reliefmap-test-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from reliefmap.api.deps import get_storage  # noqa: E402
from reliefmap.db import get_db, init_db  # noqa: E402
from reliefmap.services.image.files import ImageFile  # noqa: E402
from reliefmap.services.storage import LocalObjectStorage  # noqa: E402


# =============================================================================
# IMAGES
# =============================================================================

def _dms(value: float):
    """Decimal degrees -> three EXIF rationals (seconds kept to 1/100)."""
    value = abs(value)
    deg = int(value)
    minutes_f = (value - deg) * 60
    minutes = int(minutes_f)
    seconds = round((minutes_f - minutes) * 60 * 100)
    return (IFDRational(deg, 1), IFDRational(minutes, 1), IFDRational(seconds, 100))


def build_photo(
    size=(64, 48),
    color="red",
    fmt="JPEG",
    lat=None,
    lng=None,
    model=None,
    taken=None,
    modified=None,
    quality=95,
) -> bytes:
    img = Image.new("RGB", size, color)
    exif = Image.Exif()
    if model:
        exif[0x0110] = model  # Model
    if modified:
        exif[0x0132] = modified  # DateTime
    if taken:
        exif[0x8769] = {0x9003: taken}  # Exif IFD / DateTimeOriginal
    if lat is not None and lng is not None:
        exif[0x8825] = {
            1: "N" if lat >= 0 else "S",
            2: _dms(lat),
            3: "E" if lng >= 0 else "W",
            4: _dms(lng),
        }
    params = {"quality": quality} if fmt == "JPEG" else {}
    if len(exif):
        params["exif"] = exif
    buf = io.BytesIO()
    img.save(buf, format=fmt, **params)
    return buf.getvalue()


@pytest.fixture
def make_photo():
    """Factory for in-memory photos, optionally carrying GPS / camera / time tags."""
    def _make(name="photo.jpg", content_type="image/jpeg", **kwargs) -> ImageFile:
        return ImageFile(filename=name, content_type=content_type, data=build_photo(**kwargs))
    return _make


@pytest.fixture
def atlanta_photo(make_photo):
    return make_photo(
        name="atlanta.jpg",
        lat=33.7490,
        lng=-84.3880,
        model="Pixel 8",
        taken="2024:09:27 10:15:00",
        modified="2024:09:28 08:00:00",
    )


# =============================================================================
# DATABASE / API
# =============================================================================

@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStorage(root=tmp_path / "data", base_url="/data")


@pytest.fixture
def client(engine, storage):
    from reliefmap.main import app

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def victim_headers():
    return {"X-User-Id": "victim-1"}


@pytest.fixture
def volunteer_headers():
    return {"X-User-Id": "volunteer-1"}
