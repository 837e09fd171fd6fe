from typing import Optional
from fastapi import FastAPI, HTTPException, Query
from config import settings
from agents.outreach_writer import OutreachWriter
from services.event_source import EventSourceError
from services.student_store import StudentEventStore
from services.student_sync import StudentSync
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Student Triage Core",
    version="0.1.0",
    description="Scores student activity events into a ranked urgency queue for outreach staff"
)

# One store per process; refreshed on demand from the event source
store = StudentEventStore()
student_sync = StudentSync(store)
outreach_writer = OutreachWriter()


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "service": "Student Triage Core"
    }


@app.get("/students")
async def list_students(
    unacknowledged_only: bool = False,
    limit: Optional[int] = Query(default=None, ge=0)
):
    """List students ranked by urgency

    Args:
        unacknowledged_only: Only include students nobody has acknowledged yet
        limit: Maximum number of students to return

    Returns:
        {
            "students": [student_view, ...],
            "stats": {"totalStudents": int, "totalEvents": int, "initialized": bool}
        }
    """
    try:
        students = store.list_students(unacknowledged_only=unacknowledged_only, limit=limit)
        return {
            "students": [s.model_dump(mode="json") for s in students],
            "stats": store.get_stats().model_dump()
        }
    except Exception as e:
        logger.error(f"Error loading students: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load students")


@app.post("/students/refresh")
def refresh_students():
    """Fetch the latest events from the event source and re-score affected students

    Returns:
        {
            "status": "success",
            "events_fetched": int,
            "events_ingested": int,
            "total_students": int
        }
    """
    try:
        logger.info("Student refresh triggered via API")
        result = student_sync.sync()
        return {"status": "success", **result}
    except EventSourceError as e:
        logger.error(f"Event source unavailable during refresh: {str(e)}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Error refreshing students: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to refresh students")


@app.get("/students/{student_id}")
async def get_student(student_id: str):
    """Get one student's current triage state"""
    student = store.get_student(student_id)

    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")

    return student.model_dump(mode="json")


@app.post("/students/{student_id}/acknowledge")
async def acknowledge_student(student_id: str):
    """Mark a student as reviewed

    The flag is cleared again automatically when a new event arrives for the student.
    """
    try:
        success = store.acknowledge(student_id)

        if not success:
            raise HTTPException(status_code=404, detail="Student not found")

        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error acknowledging student {student_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to acknowledge student")


@app.get("/students/{student_id}/outreach")
def generate_outreach(student_id: str):
    """Draft an outreach message for a student

    Falls back to a fixed check-in message when the text service is unavailable.

    Returns:
        {"message": str}
    """
    student = store.get_student(student_id)

    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")

    logger.info(f"Generating outreach message for student {student_id}")
    message = outreach_writer.generate_outreach_message(student)
    return {"message": message}


@app.get("/stats")
async def get_stats():
    """Totals across the store and whether the first sync has completed"""
    return store.get_stats().model_dump()


@app.on_event("startup")
async def startup_event():
    """Load the first batch of events on server startup"""
    logger.info("Starting Student Triage Core")

    if not settings.SYNC_ON_STARTUP:
        logger.info("Startup sync disabled. Use /students/refresh to load events.")
        return

    try:
        student_sync.sync()
    except EventSourceError as e:
        # Serve an empty, uninitialized store until a refresh succeeds
        logger.error(f"Initial sync failed: {str(e)}")
    except Exception as e:
        logger.error(f"Unexpected error during initial sync: {str(e)}", exc_info=True)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on server shutdown"""
    logger.info("Shutting down Student Triage Core")
