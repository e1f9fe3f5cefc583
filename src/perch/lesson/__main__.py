"""Start the lesson app: ``python -m perch.lesson``."""

import logging

from perch.lesson.app import app

logging.basicConfig(level=app.config.log_level.upper())
app.run()
