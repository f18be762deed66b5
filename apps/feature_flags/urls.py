"""
URL configuration for the feature flags app.
"""

from django.urls import path

from . import views

app_name = "feature_flags"

urlpatterns = [
    path("api/feature-flags/", views.feature_flags_view, name="feature_flags"),
]
