"""Student Attendance package.

Organized by feature modules (users, directory, attendance, reports) with a thin
Flask controller layer over service and repository layers.
"""
