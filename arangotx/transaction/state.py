"""
Transaction handle lifecycle.
"""

from enum import Enum


class TransactionState(Enum):
    """
    Lifecycle of a transaction handle.
    
    State transitions:
    BUILDING → EXECUTING → DONE
                   ↖______↙  (re-execution)
    """
    
    BUILDING = "BUILDING"  # Accepting fragments and options
    EXECUTING = "EXECUTING"  # Request in flight
    DONE = "DONE"  # Execute returned or raised
    
    def can_transition_to(self, new_state: "TransactionState") -> bool:
        """
        Check if transition to new state is valid.
        
        Args:
            new_state: Target state
        
        Returns:
            True if transition is valid
        """
        valid_transitions = {
            TransactionState.BUILDING: {TransactionState.EXECUTING},
            TransactionState.EXECUTING: {TransactionState.DONE},
            TransactionState.DONE: {TransactionState.EXECUTING},
        }
        
        return new_state in valid_transitions.get(self, set())
