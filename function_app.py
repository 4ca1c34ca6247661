import os, json, logging, traceback
import azure.functions as func
from dotenv import load_dotenv

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# Only read .env locally (Azure often doesn't set WEBSITE_INSTANCE_ID; use a broader check)
IS_AZURE = bool(os.getenv("WEBSITE_SITE_NAME")) or os.getenv("FUNCTIONS_WORKER_RUNTIME") == "python"
if not IS_AZURE:
    load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

from db import init_db

init_db()

REGISTERED: list[str] = []
FAILURES: dict[str, dict] = {}

def _try(modpath: str, name: str):
    try:
        mod = __import__(modpath, fromlist=["bp"])
        app.register_functions(getattr(mod, "bp"))
        REGISTERED.append(name)
    except Exception as e:
        logging.getLogger(__name__).exception(f"Failed to register blueprint {name}")
        FAILURES[name] = {"error": repr(e), "trace": traceback.format_exc()}

# 🔹 Register AT STARTUP so the Functions host discovers HTTP triggers
_try("routes.messages", "messages")

@app.function_name(name="Ping")
@app.route(route="ping", methods=["GET"])
def ping(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse("ok", mimetype="text/plain")

# Diagnostics (read-only)
@app.function_name(name="Diag")
@app.route(route="_diag", methods=["GET"])
def diag(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"registered": REGISTERED, "failures": FAILURES}),
        mimetype="application/json"
    )
