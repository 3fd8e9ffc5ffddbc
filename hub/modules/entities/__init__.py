# 📄 File: hub/modules/entities/__init__.py
# Entities module: people and organizations with their emails and phones.
