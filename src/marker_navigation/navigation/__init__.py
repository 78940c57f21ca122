"""Import classes used to search for a marker and resolve its destination into a goal."""

from .destination_catalog import DestinationCatalog as DestinationCatalog
from .destination_catalog import DestinationEntry as DestinationEntry
from .destination_catalog import UnknownMarkerId as UnknownMarkerId
from .events import GoalReached as GoalReached
from .events import MarkerObserved as MarkerObserved
from .events import NavigationEvent as NavigationEvent
from .goal_resolver import Goal as Goal
from .goal_resolver import GoalResolver as GoalResolver
from .outcome import Outcome as Outcome
from .search_state import SearchState as SearchState
from .search_state import SearchStateMachine as SearchStateMachine
from .target_reacher import TargetReacher as TargetReacher
