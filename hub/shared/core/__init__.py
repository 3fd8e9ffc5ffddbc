# 📄 File: hub/shared/core/__init__.py
# Exceptions, security and FastAPI dependencies.
