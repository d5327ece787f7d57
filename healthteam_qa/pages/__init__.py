"""
Page objects for the Health Team web application.
"""

from healthteam_qa.pages.dashboard_page import DashboardPage
from healthteam_qa.pages.header_page import HeaderPage
from healthteam_qa.pages.login_page import LoginPage
from healthteam_qa.pages.patient_details_page import PatientDetailsPage, PatientStatus

__all__ = [
    "DashboardPage",
    "HeaderPage",
    "LoginPage",
    "PatientDetailsPage",
    "PatientStatus",
]
