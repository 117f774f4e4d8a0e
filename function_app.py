"""Azure Functions entry point: runs the FastAPI app behind an HTTP trigger."""

import azure.functions as func

from customer_lookup.main import app as fastapi_app

app = func.AsgiFunctionApp(app=fastapi_app, http_auth_level=func.AuthLevel.FUNCTION)
