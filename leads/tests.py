"""
Tests for the leads app: public submission, notification mail, staff access.
"""

from unittest.mock import patch

from django.contrib.auth.models import User
from django.core import mail
from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from properties.models import Property
from services import NotificationError
from .models import Lead


class LeadModelTest(TestCase):

    def test_defaults(self):
        lead = Lead.objects.create(
            name='Anna', email='anna@example.com', phone='+66 81 234 5678', message='Hello'
        )
        self.assertEqual(lead.status, 'new')
        self.assertEqual(lead.source, 'website')
        self.assertIsNone(lead.property)

    def test_property_delete_keeps_lead(self):
        prop = Property.objects.create(
            title='Sea View Condo', slug='sea-view-condo', price=3500000, location='Jomtien',
            area=45, property_type='condo', listing_type='sale'
        )
        lead = Lead.objects.create(
            name='Ben', email='ben@example.com', phone='123', message='Interested', property=prop
        )
        prop.delete()
        lead.refresh_from_db()
        self.assertIsNone(lead.property)


class LeadAPITest(APITestCase):

    def setUp(self):
        cache.clear()
        self.url = reverse('lead-list')
        self.payload = {
            'name': 'Anna Schmidt',
            'email': 'anna@example.com',
            'phone': '+49 170 1234567',
            'message': 'Is the condo still available?',
        }
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'pw', is_staff=True)
        self.agent = User.objects.create_user('agent', 'agent@example.com', 'pw')

    def test_public_create_returns_success_and_lead(self):
        response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['lead']['status'], 'new')
        self.assertEqual(Lead.objects.count(), 1)

    def test_create_sends_notification(self):
        self.client.post(self.url, self.payload, format='json')

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.subject, 'New Lead: Anna Schmidt')
        self.assertEqual(message.reply_to, ['anna@example.com'])
        self.assertIn('Is the condo still available?', message.body)
        self.assertEqual(message.alternatives[0][1], 'text/html')

    def test_create_with_property(self):
        prop = Property.objects.create(
            title='Pool Villa', slug='pool-villa', price=12000000, location='East Pattaya',
            area=220, property_type='villa', listing_type='sale'
        )
        response = self.client.post(self.url, {**self.payload, 'property': prop.pk}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['lead']['property_title'], 'Pool Villa')

    def test_missing_fields_rejected(self):
        for field in ('name', 'email', 'phone', 'message'):
            payload = dict(self.payload)
            del payload[field]
            response = self.client.post(self.url, payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, field)
            self.assertIn(field, response.data['details'])
        self.assertEqual(Lead.objects.count(), 0)

    def test_client_cannot_set_status(self):
        response = self.client.post(self.url, {**self.payload, 'status': 'closed'}, format='json')
        self.assertEqual(response.data['lead']['status'], 'new')

    def test_mail_failure_does_not_fail_create(self):
        with patch('services.notifications.send_lead_notification',
                   side_effect=NotificationError('smtp down')):
            response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Lead.objects.count(), 1)

    def test_list_requires_staff(self):
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.agent)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.staff)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)

    def test_staff_update_changes_status_only(self):
        lead = Lead.objects.create(**self.payload)
        self.client.force_authenticate(self.staff)

        response = self.client.patch(
            reverse('lead-detail', args=[lead.pk]),
            {'status': 'contacted', 'name': 'Someone Else'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        lead.refresh_from_db()
        self.assertEqual(lead.status, 'contacted')
        self.assertEqual(lead.name, 'Anna Schmidt')

    def test_staff_update_rejects_unknown_status(self):
        lead = Lead.objects.create(**self.payload)
        self.client.force_authenticate(self.staff)

        response = self.client.patch(
            reverse('lead-detail', args=[lead.pk]), {'status': 'won'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_staff_delete(self):
        lead = Lead.objects.create(**self.payload)
        self.client.force_authenticate(self.staff)

        response = self.client.delete(reverse('lead-detail', args=[lead.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Lead.objects.exists())
