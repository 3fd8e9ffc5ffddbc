# 📄 File: hub/modules/auth/__init__.py
# Auth module: sign-in, session lookup and logout.
