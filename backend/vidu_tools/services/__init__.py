"""Vidu service layer.

Each tool runs one of these flows:
  image-to-video  → normalize params → create task → poll status → format
  check-status    → query status → interpret → format
  upload-image    → check file → create link → PUT bytes → finish
"""
