from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
	]

	operations = [
		migrations.CreateModel(
			name='Supplier',
			fields=[
				('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
				('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
				('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
				('supplier_name', models.CharField(max_length=200, verbose_name='Nome do fornecedor')),
				('supplier_category', models.CharField(blank=True, default='', max_length=120, verbose_name='Categoria')),
				('contact_email', models.EmailField(blank=True, default='', max_length=254, verbose_name='E-mail')),
				('phone_number', models.CharField(blank=True, default='', max_length=30, verbose_name='Telefone')),
				('status', models.CharField(choices=[('on', 'Ativo'), ('off', 'Inativo')], default='on', max_length=3, verbose_name='Status')),
			],
			options={
				'verbose_name': 'Fornecedor',
				'verbose_name_plural': 'Fornecedores',
				'ordering': ('supplier_name',),
			},
		),
	]
