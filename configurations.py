import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Tariff settings
TARIFF_FILE = os.getenv('TARIFF_FILE', 'data/rates.csv')  # .csv, .txt or .xlsx
DEFAULT_SERVICE = os.getenv('DEFAULT_SERVICE', 'EXPRESS')
VOLUMETRIC_DIVISOR = float(os.getenv('VOLUMETRIC_DIVISOR', '5000'))  # cm3 per kg

# Application settings
CURRENCY = os.getenv('CURRENCY', 'LKR')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
