import os
from dotenv import load_dotenv
from pathlib import Path
import bittensor as bt

env_path = Path(__file__).parents[1] / '.env'
load_dotenv(dotenv_path=env_path)

__version__ = "1.3.0"

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DATA_ROOT = PACKAGE_ROOT.parent / "saves"

# Reward settings file (ConfigNode text, reloaded at every session load)
SETTINGS_PATH = os.getenv('SCIENCE_FUNDING_SETTINGS', str(PACKAGE_ROOT / "settings.cfg"))
SETTINGS_NODE_NAME = "SCIENCE_FUNDING_SETTINGS"

# Fallback used when the settings file cannot be parsed
DEFAULT_FUNDS_MULTIPLIER = 1000.0
DEFAULT_REP_MULTIPLIER = 1.0
DEFAULT_QUEUE_LENGTH = 5

# Session state
STATE_PATH = os.getenv('SCIENCE_FUNDING_STATE', str(DATA_ROOT / "persistent.sfs"))
QUEUE_NODE_NAME = "QUEUE"
REPORT_NODE_NAME = "REPORT"

# Rewards log
REWARDS_LOG_DIR = os.getenv('REWARDS_LOG_DIR', str(DATA_ROOT / "logs"))
REWARDS_LOG_RETENTION_SIZE = int(os.getenv('REWARDS_LOG_RETENTION_SIZE', str(5 * 1024 * 1024)))

# User notifications
REPORT_TITLE = "New funds available!"
REPORT_HEADER = "Your recent research efforts have granted you the following rewards:"
CONFIG_ERROR_TITLE = "ScienceFunding error!"
CONFIG_ERROR_MESSAGE = (
    "I'm sorry to break your immersion, but there seems to be an error in the configuration"
    " and ScienceFunding is not working properly right now. You should check the values in the config file."
)

# Log out all non-sensitive config variables
bt.logging.info(f"SETTINGS_PATH: {SETTINGS_PATH}")
bt.logging.info(f"STATE_PATH: {STATE_PATH}")
bt.logging.info(f"REWARDS_LOG_DIR: {REWARDS_LOG_DIR}")
bt.logging.info(f"REWARDS_LOG_RETENTION_SIZE: {REWARDS_LOG_RETENTION_SIZE}")
