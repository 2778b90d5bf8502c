# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from datetime import datetime, timezone
from pathlib import Path

from platformdirs import user_config_dir, user_log_path

APP_NAME = "changelog"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = ".changelog.yml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / "config.yml"
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

# Refs used when the caller does not supply a range
DEFAULT_FROM_REF = "master~1"
DEFAULT_TO_REF = "master"

GITHUB_WEB_URL = "https://github.com"
GITHUB_API_URL = "https://api.github.com"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"

# GitHub's compare endpoint never returns more than this many commits
GITHUB_COMPARE_LIMIT = 250

# Wall-clock budget (seconds) for each remote call
DEFAULT_TIMEOUT_S = 10.0

# Sort key for records whose timestamp is unknown
ZERO_INSTANT = datetime.min.replace(tzinfo=timezone.utc)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "default.md.j2"
