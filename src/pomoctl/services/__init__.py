"""Service layer — timer orchestration behind the ServiceResult contract."""
