"""Output layer — Rich (human) and JSON (machine) rendering of ServiceResult."""
