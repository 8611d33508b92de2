"""Static metadata describing the Kinmen course player."""

APP_NAME = "Kinmen Course Player"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "A classroom course player for the Kinmen dialect built with Qt and FastAPI. "
    "Step through slides, play the matching games, and let teachers follow class progress from the web API."
)
