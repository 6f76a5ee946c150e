"""
Deployment Scripts
Operator-run entry points: SAVI deployment and deployment gas estimation
"""
