from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
	]

	operations = [
		migrations.CreateModel(
			name='Product',
			fields=[
				('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
				('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
				('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
				('name', models.CharField(max_length=200, verbose_name='Nome')),
				('description', models.TextField(verbose_name='Descrição')),
				('price', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Preço')),
				('stock_quantity', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='Quantidade em estoque')),
				('supplier_id', models.CharField(max_length=64, verbose_name='Fornecedor (ID)')),
				('status', models.CharField(choices=[('on', 'Ativo'), ('off', 'Inativo')], default='on', max_length=3, verbose_name='Status')),
			],
			options={
				'verbose_name': 'Produto',
				'verbose_name_plural': 'Produtos',
				'ordering': ('name',),
			},
		),
	]
