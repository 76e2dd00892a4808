"""AWS Lambda entry point.

Wraps the FastAPI app with Mangum so API Gateway / function URL events are
served by the same /webhook routes as the uvicorn server.
"""
from mangum import Mangum

from main import app

handler = Mangum(app, lifespan="off")


def lambda_handler(event, context):
    return handler(event, context)
