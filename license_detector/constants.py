"""Constants for license-detector."""

# Only look for copyrights and licenses at the top of each file
MAX_FILE_SIZE = 512 * 1024

# Packaged bodies for the well-known license table (see resolvers.well_known)
DATA_PACKAGE = "license_detector"
DATA_DIRECTORY = "data"
