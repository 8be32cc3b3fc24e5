import os

url = os.environ.get("SETTEE_URL", "http://localhost:5984")
username = os.environ.get("SETTEE_USERNAME")
password = os.environ.get("SETTEE_PASSWORD")
timeout = float(os.environ.get("SETTEE_TIMEOUT", "5"))
adapter = os.environ.get("SETTEE_ADAPTER", "requests")


def auth() -> tuple[str, str] | None:
    if username and password:
        return (username, password)
    return None
