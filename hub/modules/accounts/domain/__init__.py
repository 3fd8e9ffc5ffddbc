# 📄 File: hub/modules/accounts/domain/__init__.py
# Business rules and value types.
