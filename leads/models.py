"""
Lead model for PW Pattaya.

A lead is a contact request submitted through the website, optionally about
a specific property. Staff move it through the sales pipeline by status.
"""

from django.db import models


class Lead(models.Model):
    """Contact request from a website visitor."""

    STATUS_CHOICES = [
        ('new', 'New'),
        ('contacted', 'Contacted'),
        ('qualified', 'Qualified'),
        ('closed', 'Closed'),
    ]

    name = models.CharField(max_length=255)
    email = models.EmailField()
    phone = models.CharField(max_length=50)
    subject = models.CharField(max_length=255, blank=True, null=True)
    message = models.TextField()

    property = models.ForeignKey(
        'properties.Property',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='leads',
        help_text="Listing the visitor asked about, if any"
    )

    source = models.CharField(max_length=50, default='website')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='new', db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'leads'
        ordering = ['-created_at']
        verbose_name = 'Lead'
        verbose_name_plural = 'Leads'

    def __str__(self):
        return f"{self.name} <{self.email}> ({self.status})"
