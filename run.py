#!/usr/bin/env python
"""
Training log CLI runner.

Usage:
    python run.py log --week 1 --exercise Squat --weight 100 --reps 5 --rir 2
    python run.py history   # list logged sets
    python run.py chart -e Squat
    python run.py export    # write training_data.xlsx
    python run.py import FILE
"""

import sys
from pathlib import Path

# add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from adaptive_training.main import main

if __name__ == "__main__":
    main()
