import pathlib
import sys

BACKEND = pathlib.Path(__file__).resolve().parent
for path in (BACKEND, BACKEND / "fulbito_model"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fulbito_api import create_app

app = create_app()
