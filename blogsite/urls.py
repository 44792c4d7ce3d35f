from django.urls import include, path

from contentapi import views as contentapi_views

urlpatterns = [
    path("api/docs/", contentapi_views.upsert_doc, name="upsert_doc"),
    path("", include("pages.urls")),
]
