import sys
from pathlib import Path

# Make `users_api` importable from a plain checkout (apps/api is the source root).
ROOT = Path(__file__).resolve().parents[1]
API_PATH = ROOT / "apps" / "api"
if str(API_PATH) not in sys.path:
    sys.path.insert(0, str(API_PATH))
