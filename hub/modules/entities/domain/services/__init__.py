# 📄 File: hub/modules/entities/domain/services/__init__.py
