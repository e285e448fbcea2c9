from platformdirs import user_config_path

PACKAGE_NAME = "jarhttp"  # Python package name

# -----------------------------------------------------------------------------
# User-writable directories & files
# -----------------------------------------------------------------------------

# Base config directory (e.g. ~/.config/jarhttp/)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)

SETTING_PATH = USER_CONFIG_DIR / "settings.toml"

# Config filenames looked up in the working directory, in order
LOCAL_CONFIG_FILENAMES = ["jarhttp.toml", "jarhttp.json"]
