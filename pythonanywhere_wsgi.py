import sys
import os

# Add your project directory to the sys.path
project_home = os.environ.get('FITPLAN_HOME', '/home/YOUR_USERNAME/fitplan')
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Set the working directory
os.chdir(project_home)

# Build the Flask app with production settings
from app import create_app, init_db

application = create_app('production')
init_db(application)
