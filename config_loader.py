# Module for loading and validating configuration
import json
import sys
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import constants # Import constants

def load_config(config_path="config.json"):
    """Loads configuration from a JSON file, validates, and sets defaults."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        # --- Validation ---
        required_keys = ["cache_dir", "pictures_dir", "log_file"]
        if not all(key in config for key in required_keys):
            missing_keys = [key for key in required_keys if key not in config]
            raise ValueError(f"Config file '{config_path}' is missing required keys: {', '.join(missing_keys)}")

        # --- Set Defaults for Optional Keys ---
        config['start_url'] = config.get('start_url', constants.DEFAULT_START_URL)
        config['avatars_dir'] = config.get('avatars_dir', constants.DEFAULT_AVATARS_DIR)
        config['notes_dump_file'] = config.get('notes_dump_file', constants.DEFAULT_NOTES_DUMP_FILE)
        config['tags_dump_file'] = config.get('tags_dump_file', constants.DEFAULT_TAGS_DUMP_FILE)
        config['comments_dump_file'] = config.get('comments_dump_file', constants.DEFAULT_COMMENTS_DUMP_FILE)
        config['user_agent'] = config.get('user_agent', constants.DEFAULT_USER_AGENT)
        config['request_timeout_seconds'] = config.get('request_timeout_seconds', constants.DEFAULT_TIMEOUT)
        config['source_timezone'] = config.get('source_timezone', constants.DEFAULT_SOURCE_TIMEZONE)

        # --- Further Validation ---
        timeout = config['request_timeout_seconds']
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("Config 'request_timeout_seconds' must be a positive number.")

        try:
            ZoneInfo(config['source_timezone'])
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Config 'source_timezone' is not a known time zone: {config['source_timezone']}") from e

        if not config['start_url'].startswith(constants.WAYBACK_BASE_URL):
            # Use print here as logging might not be configured yet
            print(f"Warning: start_url '{config['start_url']}' is not an archive URL. Defaulting to '{constants.DEFAULT_START_URL}'.", file=sys.stderr)
            config['start_url'] = constants.DEFAULT_START_URL

        return config

    except FileNotFoundError:
        raise
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from config file '{config_path}': {e}") from e
    except ValueError:
        raise
    except Exception as e: # Catch any other unexpected errors during loading/validation
        raise RuntimeError(f"An unexpected error occurred loading configuration from '{config_path}': {e}") from e
