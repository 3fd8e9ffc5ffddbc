# 📄 File: hub/modules/accounts/domain/services/__init__.py
