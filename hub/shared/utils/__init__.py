# 📄 File: hub/shared/utils/__init__.py
# Logging, response envelope and small helpers.
