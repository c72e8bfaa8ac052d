from django.urls import path

from casework import views

urlpatterns = [
    path('cases', views.CaseListAPIView.as_view(), name='case-list-api'),
    path('cases/alerts', views.CaseAlertsAPIView.as_view(), name='case-alerts-api'),
    path('cases/<uuid:pk>', views.CaseDetailAPIView.as_view(), name='case-detail-api'),
    path('health', views.HealthAPIView.as_view(), name='health-api'),
]
