from medtrack.models.model_base import Base
from medtrack.models.model_user import User
from medtrack.models.model_medication import Medication
from medtrack.models.model_medication_log import MedicationLog
