from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 8081)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "0.0.0.0")
BASE_URL = config.get("BASE_URL", "http://localhost:8081").rstrip("/")

# Timeout configuration for outbound provider calls
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# X OAuth 2.0 configuration (confidential client, authorization code + PKCE)
X_CLIENT_ID = config.get("X_CLIENT_ID", "")
X_CLIENT_SECRET = config.get_secret("X_CLIENT_SECRET")
X_AUTHORIZE_URL = config.get("X_AUTHORIZE_URL", "https://x.com/i/oauth2/authorize")
X_TOKEN_URL = config.get("X_TOKEN_URL", "https://api.x.com/2/oauth2/token")
X_PROFILE_URL = config.get("X_PROFILE_URL", "https://api.x.com/2/users/me")
X_REVOKE_URL = config.get("X_REVOKE_URL", "https://api.x.com/2/oauth2/revoke")
# Must match the value registered with the provider byte for byte
X_REDIRECT_URI = config.get("X_REDIRECT_URI", f"{BASE_URL}/auth/callback")
X_SCOPES = config.get("X_SCOPES", "tweet.read users.read offline.access")

# Pending auth attempts (30 minutes)
AUTH_ATTEMPT_TTL = config.get("AUTH_ATTEMPT_TTL", 1800)

# Sessions
SESSION_COOKIE_NAME = config.get("SESSION_COOKIE_NAME", "gamelab_session")
STATE_COOKIE_NAME = config.get("STATE_COOKIE_NAME", "gamelab_auth_state")
COOKIE_SECURE = config.get("COOKIE_SECURE", True)
# Used when the provider omits expires_in
DEFAULT_SESSION_TTL = config.get("DEFAULT_SESSION_TTL", 7200)

# Redirect targets
ERROR_PAGE = config.get("ERROR_PAGE", "/auth-error")
LANDING_PAGE = config.get("LANDING_PAGE", "/")
ENTRY_PAGE_PREFIX = config.get("ENTRY_PAGE_PREFIX", "/games")

# Catalog data store
SUPABASE_URL = config.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = config.get_secret("SUPABASE_SERVICE_ROLE_KEY")
ENTRIES_TABLE = config.get("ENTRIES_TABLE", "games")
