#!/usr/bin/env python3
"""Entry point for the Profile Chat application."""

import argparse
import sys

from profile_chat.app import ProfileChatApp
from profile_chat.config_manager import ConfigManager
from profile_chat.logging_config import get_logger, setup_logging
from profile_chat.web.app import ProfileChatWebApp


def main(argv=None):
    """Load configuration, open the profile and serve the web shell."""
    parser = argparse.ArgumentParser(description="Profile Chat")
    parser.add_argument("--config", default=None, help="Path to the JSON config file")
    parser.add_argument("--host", default=None, help="Override the configured web host")
    parser.add_argument("--port", type=int, default=None, help="Override the configured web port")
    args = parser.parse_args(argv)

    config_manager = ConfigManager(args.config)
    config = config_manager.get_config()

    setup_logging(config.log_level, config.log_dir)
    logger = get_logger("start_app")

    if not config_manager.validate_config():
        logger.error(f"Invalid configuration in {config_manager.config_path}")
        return 1

    profile_app = ProfileChatApp(config_manager)
    try:
        profile = profile_app.start()
        logger.info(f"Loaded profile {profile.id} ({profile.display_name})")

        web_app = ProfileChatWebApp(profile_app)
        web_app.run(host=args.host or config.web_host, port=args.port or config.web_port)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        profile_app.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
