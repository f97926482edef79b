# Utility modules for the plan app
from .logger import configure_logging
from .validators import safe_int, sanitize_text, parse_plan_date, parse_bool
