"""StudentixFlow course-management API."""
