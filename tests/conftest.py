import os
import tempfile

# Keep logs and databases out of the user's home during test runs
os.environ.setdefault("PLUTUS_HOME", tempfile.mkdtemp(prefix="plutus-tests-"))
