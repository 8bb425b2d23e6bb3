from mangum import Mangum
from main import app

# AWS Lambda entrypoint using API Gateway HTTP API. API Gateway buffers
# responses, so the generated text arrives in one piece there; use Lambda
# Function URLs with response streaming or an ASGI host to keep it progressive.
handler = Mangum(app)
