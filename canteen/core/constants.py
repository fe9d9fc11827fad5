import os

from canteen.core.config import settings

# 📁 Uploaded menu photos, and the URL they are served under
STATIC_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "static")
UPLOAD_DIR = settings.upload_dir or os.path.join(STATIC_DIR, "uploads", "menu_items")
IMAGE_URL_PREFIX = "/static/uploads/menu_items/"

ALLOWED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp"}

# InnoDB full-text ignores words shorter than this
MIN_SEARCH_TOKEN_LENGTH = 3

# Ensure all folders exist
for path in (STATIC_DIR, UPLOAD_DIR):
    os.makedirs(path, exist_ok=True)
