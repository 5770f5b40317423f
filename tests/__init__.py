"""
Test environment: temp database, client store, public dir and settings file.
Set before any repufrenos module reads its cached settings.
"""
import os
import tempfile

TEST_ROOT = tempfile.mkdtemp(prefix="repufrenos-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_ROOT}/test.db"
os.environ["STORAGE_DIR"] = os.path.join(TEST_ROOT, "storage")
os.environ["PUBLIC_DIR"] = os.path.join(TEST_ROOT, "public")
os.environ["ENV_FILE_PATH"] = os.path.join(TEST_ROOT, "settings.env")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "CRITICAL"
for _key in ("ADMIN_USERNAME", "ADMIN_PASSWORD", "ADMIN_USER_1_USERNAME", "ADMIN_USER_1_PASSWORD"):
    os.environ.pop(_key, None)
