# 📄 File: hub/modules/auth/domain/services/__init__.py
