import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('promotions', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('purchase', 'Purchase'), ('adjustment', 'Adjustment'), ('transfer', 'Transfer'), ('redemption', 'Redemption'), ('event', 'Event')], max_length=16)),
                ('amount', models.IntegerField()),
                ('spent', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('related_id', models.IntegerField(blank=True, null=True)),
                ('suspicious', models.BooleanField(default=False)),
                ('remark', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='created_transactions', to=settings.AUTH_USER_MODEL)),
                ('processed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='processed_transactions', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Transaction',
                'verbose_name_plural': 'Transactions',
                'db_table': 'transactions',
                'ordering': ['-id'],
            },
        ),
        migrations.CreateModel(
            name='TransactionPromotion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('promotion', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transaction_links', to='promotions.promotion')),
                ('transaction', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='promotion_links', to='points.transaction')),
            ],
            options={
                'verbose_name': 'Transaction Promotion',
                'verbose_name_plural': 'Transaction Promotions',
                'db_table': 'transaction_promotions',
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('transaction', 'promotion'), name='unique_transaction_promotion'),
                ],
            },
        ),
        migrations.AddField(
            model_name='transaction',
            name='promotions',
            field=models.ManyToManyField(blank=True, related_name='transactions', through='points.TransactionPromotion', to='promotions.promotion'),
        ),
        migrations.AddConstraint(
            model_name='transaction',
            constraint=models.CheckConstraint(condition=models.Q(models.Q(('type', 'purchase'), _negated=True), ('spent__isnull', False), _connector='OR'), name='purchase_has_spent'),
        ),
        migrations.AddConstraint(
            model_name='transaction',
            constraint=models.CheckConstraint(condition=models.Q(models.Q(('type', 'transfer'), _negated=True), ('related_id__isnull', False), _connector='OR'), name='transfer_has_related_id'),
        ),
    ]
