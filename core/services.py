"""
Base service classes.
Services contain business logic and orchestrate queries over the models.
"""
import logging


class BaseService:
    """
    Base service class providing common functionality.
    Services should contain business logic; views stay thin.
    """
    
    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
    
    def log_info(self, message: str, **context):
        """Log info message with context"""
        self.logger.info(f"{message} | Context: {context}")
