"""
CPU scheduling simulator: FCFS, SJF and Round Robin over a fixed job set.
"""
