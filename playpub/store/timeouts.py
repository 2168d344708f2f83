from __future__ import annotations

# JSON API calls (edits.insert, tracks.list/update, edits.commit)
API_TIMEOUT_SECONDS = 60.0

# Media uploads (APK/AAB, mapping, native symbols); bundles can be large
UPLOAD_TIMEOUT_SECONDS = 30 * 60.0
