import logging
import os

from dotenv import load_dotenv


# Paths
BASE_PATH = os.path.dirname(__file__)
PARENT_PATH = os.path.dirname(os.path.dirname(BASE_PATH))

PYTEST_RUNNING = bool(os.getenv("PYTEST_VERSION"))

load_dotenv(os.path.join(PARENT_PATH, ".env.test" if PYTEST_RUNNING else ".env"))

# Server
GITLAB_URL = os.getenv("GITLAB_URL", "https://gitlab.com")
GITLAB_TOKEN = os.getenv("GITLAB_TOKEN")
API_VERSION = os.getenv("GITLAB_API_VERSION", "v4")

# Requests
# Parsed and validated by GitLabApi
DEFAULT_PER_PAGE = os.getenv("GITLAB_PER_PAGE", "20")
REQUEST_TIMEOUT_SECS = os.getenv("GITLAB_TIMEOUT_SECS", "30")
USER_AGENT = "gitlab-client/0.1.0"

# Logging
LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"

logging.getLogger("gitlab_client").addHandler(logging.NullHandler())

urllib3_logger = logging.getLogger("urllib3")
urllib3_logger.setLevel(logging.WARNING)
del urllib3_logger
