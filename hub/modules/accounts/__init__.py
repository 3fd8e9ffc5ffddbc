# 📄 File: hub/modules/accounts/__init__.py
# Accounts module: login accounts linked to entities and roles.
