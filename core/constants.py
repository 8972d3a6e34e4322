# Listing Settings
DEFAULT_LISTING_URL_TEMPLATE = (
    "https://www.imdb.com/search/title/"
    "?title_type=feature&year={start},{end}&view=advanced"
)
DEFAULT_LOOKBACK_DAYS = 6  # Release window covers today and the 6 days before
DEFAULT_MAX_NUM_FILMS = 10
DEFAULT_SHAPE = "rating"
DEFAULT_LISTING_TIMEZONE = "UTC"
LISTING_DATE_FORMAT = "%Y-%m-%d"

# Fetch Settings
DEFAULT_FETCH_TIMEOUT = 30
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Mailgun Settings
DEFAULT_MAILGUN_API_BASE = "https://api.mailgun.net/v3"
DEFAULT_EMAIL_NAME = "Justin"
DEFAULT_EMAIL_SUBJECT = "Popular movies released this week"
MAILGUN_SENDER_NAME = "mailgun me"
MAILGUN_AUTH_USER = "api"
MAILGUN_TIMEOUT = 15

# Payload Settings
DEFAULT_LINK_KEY = "imdbLink"
DEFAULT_RATING_BUCKET = "movies"
NEW_RELEASES_BUCKET = "new"
OLD_RELEASES_BUCKET = "old"

# Default Configuration Values
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "digest.log"
DEFAULT_LOG_FORMAT = "text"  # text or json
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
DEFAULT_LOG_TIMEZONE = "UTC"
