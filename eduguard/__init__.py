"""EduGuard access-control core for a school-records platform."""
