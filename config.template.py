# Show Listings Builder Configuration Template
# Copy this file to config.py and update with your settings

# ========== SPREADSHEET SOURCE ==========
# 1. Create a Google Sheet with two tabs: "Shows" and "Venues"
# 2. Share settings: "Anyone with the link" can VIEW
# 3. The sheet ID is the long token in the sheet URL
# 4. Click each tab and copy the gid=XXXXXX value from the URL

SHEET_ID = "YOUR_SHEET_ID_HERE"
VENUES_GID = "0"
SHOWS_GID = "0"

# Shows columns: Date, Venue, Show Title, Start Time, Cost, Age, Link URL,
#                Image URL, Details, Multiples #, Notes, Venue ID, Media URL(s)
# Venues columns: Name, Address, Website, Neighborhood, Capacity

# ========== OUTPUT FILES ==========
OUTPUT_PATH = "shows.json"          # Document read by the front end
CACHE_PATH = "media-cache.json"     # Extracted Bandcamp metadata, keyed by URL

# ========== MEDIA FETCHING ==========
FETCH_MEDIA = True                  # Set False to skip Bandcamp lookups
USER_AGENT = "showsheet/1.0 (+show listings builder)"
REQUEST_TIMEOUT = 30                # Seconds per page request (None = wait forever)

# ========== LOGGING SETTINGS ==========
LOG_LEVEL = "INFO"                  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
