import os

SECRET_KEY = os.environ.get('SECRET_KEY')
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get('ACCESS_TOKEN_EXPIRE_MINUTES', '60'))

LOCAL_OWNER_ID = os.environ.get('TASKFLOW_LOCAL_OWNER_ID', '1')
