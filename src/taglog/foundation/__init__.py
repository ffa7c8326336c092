"""Foundation - error handling and configuration shared by the logging layer."""
