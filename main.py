"""
Teams Meeting Bot Service
Flask application that joins a bot into Teams meetings and fetches transcripts.
"""

import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from teams_meeting_bot.app import create_app
from teams_meeting_bot.config import get_meeting_bot_config

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

config = get_meeting_bot_config()
for error in config.validate():
    print(f"⚠️  WARNING: {error}")

app = create_app(config)


if __name__ == "__main__":
    port = int(os.getenv("PORT", "3000"))
    print(f"Server listening on {port} (build {config.build_tag})")
    app.run(host="0.0.0.0", port=port)
