from platformdirs import user_config_path

PACKAGE_NAME = "confmux"  # Python package name

# -----------------------------------------------------------------------------
# User-writable directories
# -----------------------------------------------------------------------------

# Base config directory (e.g. ~/.config/confmux/)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)
