# File: api/utils/db.py
import datetime
import traceback
from typing import Dict, List, Any, Optional

from supabase import create_client, Client

from api.utils.config import Config
from api.utils.logging import db_logger as logger

ELEMENTS_TABLE = "elements"

# Initialize supabase client with proper error handling
supabase: Optional[Client] = None

def _init_supabase() -> Optional[Client]:
    """Initialize the Supabase client."""
    # Log configuration (without revealing sensitive keys)
    if Config.SUPABASE_URL:
        logger.info(f"Initializing Supabase client with URL: {Config.SUPABASE_URL}")
    else:
        logger.error("SUPABASE_URL environment variable not set")
        return None
        
    if not Config.SUPABASE_SERVICE_ROLE_KEY:
        logger.error("SUPABASE_SERVICE_ROLE_KEY environment variable not set")
        return None
    
    try:
        supabase_client = create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_ROLE_KEY)
        logger.info("Supabase client initialized successfully")
        return supabase_client
    except Exception as e:
        logger.error(f"Failed to initialize Supabase client: {str(e)}\n{traceback.format_exc()}")
        return None

supabase = _init_supabase()

def _serialize_for_supabase(data: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize nested element data (layers, parameters) for Supabase."""
    serialized = {}
    
    for key, value in data.items():
        if isinstance(value, (datetime.datetime, datetime.date)):
            serialized[key] = value.isoformat()
        elif isinstance(value, dict):
            serialized[key] = _serialize_for_supabase(value)
        elif isinstance(value, list):
            serialized[key] = [
                _serialize_for_supabase(item) if isinstance(item, dict) 
                else item for item in value
            ]
        else:
            serialized[key] = value
    
    return serialized

def _space_query(query, project_id: str, type_id: str, space_id: str):
    return query.eq("project_id", project_id).eq("type_id", type_id).eq("space_id", space_id)

def create_element(element_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Insert a new element row."""
    if not supabase:
        logger.error("Cannot create element: Supabase client is not initialized")
        return None
    
    try:
        serialized_data = _serialize_for_supabase(element_data)
        logger.info(f"Creating element in database: {serialized_data.get('element_id')}")
        
        response = supabase.table(ELEMENTS_TABLE).insert(serialized_data).execute()
        
        if not response.data:
            logger.error("No data returned from insert operation")
            return None
            
        return response.data[0]
    except Exception as e:
        logger.error(f"Error creating element in database: {str(e)}\n{traceback.format_exc()}")
        return None

def update_element(
    project_id: str, type_id: str, space_id: str, element_id: str, update_data: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    """Replace an element's stored data."""
    if not supabase:
        logger.error(f"Cannot update element {element_id}: Supabase client is not initialized")
        return None
        
    try:
        update_data = _serialize_for_supabase(update_data)
        update_data["updated_at"] = datetime.datetime.now().isoformat()
        
        logger.info(f"Updating element {element_id} with {len(update_data.get('layers') or [])} layers")
        
        query = supabase.table(ELEMENTS_TABLE).update(update_data)
        response = _space_query(query, project_id, type_id, space_id).eq("element_id", element_id).execute()
        
        if not response.data:
            logger.error(f"No data returned from update operation for element {element_id}")
            return None
            
        logger.info(f"Element {element_id} updated successfully")
        return response.data[0]
    except Exception as e:
        logger.error(f"Error updating element {element_id}: {str(e)}\n{traceback.format_exc()}")
        return None

def get_element(project_id: str, type_id: str, space_id: str, element_id: str) -> Optional[Dict[str, Any]]:
    """
    Get an element of a space by ID.
    
    Returns:
        Element dictionary or None if not found
    """
    if not supabase:
        logger.error(f"Cannot get element {element_id}: Supabase client is not initialized")
        return None
        
    try:
        logger.info(f"Getting element {element_id}")
        
        query = supabase.table(ELEMENTS_TABLE).select("*")
        response = _space_query(query, project_id, type_id, space_id).eq("element_id", element_id).execute()
        
        if not response.data:
            logger.warning(f"Element {element_id} not found")
            return None
        
        return response.data[0]
    except Exception as e:
        logger.error(f"Error getting element {element_id}: {str(e)}\n{traceback.format_exc()}")
        return None

def list_elements(project_id: str, type_id: str, space_id: str) -> List[Dict[str, Any]]:
    """
    List the elements of a space, oldest first.
    
    Raises:
        RuntimeError: If the client is missing or the query fails
    """
    if not supabase:
        error_msg = "Cannot list elements: Supabase client is not initialized"
        logger.error(error_msg)
        raise RuntimeError(error_msg)
        
    try:
        logger.info(f"Listing elements of space {space_id}")
        query = supabase.table(ELEMENTS_TABLE).select("*")
        response = _space_query(query, project_id, type_id, space_id).order("created_at").execute()
        
        if not response or not response.data:
            logger.info("No elements found in space")
            return []
            
        logger.info(f"Retrieved {len(response.data)} elements")
        return response.data
    except Exception as e:
        logger.error(f"Error listing elements: {str(e)}\n{traceback.format_exc()}")
        raise RuntimeError(f"Database error while listing elements: {str(e)}")

def delete_element(project_id: str, type_id: str, space_id: str, element_id: str) -> bool:
    """Delete an element by ID. Returns False if nothing was deleted."""
    if not supabase:
        logger.error(f"Cannot delete element {element_id}: Supabase client is not initialized")
        return False
        
    try:
        logger.info(f"Deleting element {element_id}")
        query = supabase.table(ELEMENTS_TABLE).delete()
        response = _space_query(query, project_id, type_id, space_id).eq("element_id", element_id).execute()
        
        if response and response.data:
            logger.info(f"Element {element_id} deleted successfully")
            return True
        
        logger.warning(f"Element {element_id} not found for deletion")
        return False
    except Exception as e:
        logger.error(f"Error deleting element {element_id}: {str(e)}\n{traceback.format_exc()}")
        return False

def clear_elements(project_id: str, type_id: str, space_id: str) -> int:
    """
    Delete every element of a space.
    
    Returns:
        Number of deleted elements
    
    Raises:
        RuntimeError: If the client is missing or the query fails
    """
    if not supabase:
        error_msg = "Cannot clear elements: Supabase client is not initialized"
        logger.error(error_msg)
        raise RuntimeError(error_msg)
    
    try:
        logger.info(f"Clearing elements of space {space_id}")
        query = supabase.table(ELEMENTS_TABLE).delete()
        response = _space_query(query, project_id, type_id, space_id).execute()
        deleted = len(response.data or [])
        logger.info(f"Deleted {deleted} elements")
        return deleted
    except Exception as e:
        logger.error(f"Error clearing elements: {str(e)}\n{traceback.format_exc()}")
        raise RuntimeError(f"Database error while clearing elements: {str(e)}")

def check_supabase_connection() -> bool:
    """Check if Supabase connection is working."""
    if not supabase:
        logger.error("Supabase client is not initialized")
        return False
    
    try:
        response = supabase.table(ELEMENTS_TABLE).select("count", count="exact").limit(0).execute()
        count = getattr(response, 'count', 0)
        logger.info(f"Supabase connection verified successfully. Found {count} elements.")
        return True
    except Exception as e:
        logger.error(f"Supabase connection check failed: {str(e)}")
        return False
