from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
	]

	operations = [
		migrations.CreateModel(
			name='Order',
			fields=[
				('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
				('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
				('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
				('name', models.CharField(max_length=200, verbose_name='Nome')),
				('start_date', models.DateField(verbose_name='Data de início')),
				('end_date', models.DateField(verbose_name='Data de término')),
				('discount', models.DecimalField(decimal_places=2, max_digits=5, verbose_name='Desconto (%)')),
				('store_id', models.CharField(max_length=64, verbose_name='Loja (ID)')),
				('item', models.CharField(max_length=64, verbose_name='Produto (ID)')),
				('amount', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Valor total')),
				('status', models.CharField(choices=[('pending', 'Pendente'), ('processing', 'Processando'), ('completed', 'Concluído')], default='pending', max_length=10, verbose_name='Status')),
			],
			options={
				'verbose_name': 'Pedido',
				'verbose_name_plural': 'Pedidos',
				'ordering': ('-start_date', 'name'),
			},
		),
	]
