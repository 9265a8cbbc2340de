"""
UI package for WaterX Admin
"""
