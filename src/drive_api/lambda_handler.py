"""Lambda handler for the Drive API using Mangum."""
from mangum import Mangum

from drive_api.config.settings import get_settings
from drive_api.logging_config import setup_logging
from drive_api.main import create_app

settings = get_settings()
setup_logging(settings.log_level)

# Create FastAPI app
app = create_app(settings)

# Wrap with Mangum for Lambda compatibility
handler = Mangum(app, lifespan="off")
