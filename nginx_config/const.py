"""
Application constants and metadata.
"""

# Application info
APP_NAME = "nginx-config"
APP_VERSION = "0.1.0"
APP_URL = "https://github.com/tailhook/nginx-config"

# Default values
DEFAULT_CONFIG_PATH = "/etc/nginx/nginx.conf"

# Characters that force a value to be rendered in double quotes
SPECIAL_CHARS = frozenset(" ;\r\n\t")

# Response codes classified as redirects by error_page
REDIRECT_CODES = frozenset({301, 302, 303, 307, 308})
