# api/utils/config.py
import os
import logging

logger = logging.getLogger("building_compliance.api")

class Config:
    """Application configuration loaded from environment variables"""
    
    # API authentication
    API_KEY = os.environ.get("API_KEY", "dev_key")
    
    # Database connection
    SUPABASE_URL = os.environ.get("SUPABASE_URL")
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    
    # Application settings
    DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
    
    # Number of layers shown per page of the layer list
    LAYER_PAGE_SIZE = int(os.environ.get("LAYER_PAGE_SIZE", "5"))
    
    @classmethod
    def validate(cls):
        """Validate critical configuration values"""
        if not cls.API_KEY or cls.API_KEY == "dev_key":
            logger.warning("Using development API key - not secure for production!")
            
        if not cls.SUPABASE_URL:
            logger.error("SUPABASE_URL environment variable not set")
            
        if not cls.SUPABASE_SERVICE_ROLE_KEY:
            logger.error("SUPABASE_SERVICE_ROLE_KEY environment variable not set")
        
        if cls.LAYER_PAGE_SIZE < 1:
            logger.error(f"LAYER_PAGE_SIZE must be positive, got {cls.LAYER_PAGE_SIZE}")
