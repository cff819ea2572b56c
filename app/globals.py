"""
Global state module
Các singleton được khởi tạo một lần trong app/__init__.py và không thay đổi sau đó
"""

# Storage handle (DatabaseManager hoặc SupabaseDatabase)
database = None

# Services
attendance_service = None
training_registry = None
