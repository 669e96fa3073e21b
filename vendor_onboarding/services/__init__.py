"""Services package — all business logic lives here, never in routers.

Files:
  vendor.py   — transactional vendor aggregate writer + vendor reads
  upload.py   — document validation and upload orchestration
  storage.py  — S3 object storage for uploaded documents

Rule: routers call services, services call repositories, repositories call the gateway.
      No SQLAlchemy queries in routers. No FastAPI routing in services.
"""
